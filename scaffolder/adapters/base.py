"""
Prompter base — the contract between the conflicter and the user.

The conflicter never asks the user anything directly. Whenever a
proposed write diverges from what is on disk it hands the entry to a
Prompter and acts on the returned Decision.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from scaffolder.core.models.conflict import ConflictEntry


class Decision(str, Enum):
    """Answer to a conflict prompt."""

    WRITE = "write"
    SKIP = "skip"
    DIFF = "diff"            # show the diff, then ask again
    WRITE_ALL = "write_all"  # overwrite this and every later conflict


class Prompter(ABC):
    """Abstract interactive confirmation collaborator.

    To create a new prompter:
        1. Subclass Prompter
        2. Implement confirm and show_diff
        3. Pass it to the generator (``prompter`` option) or registry
    """

    @abstractmethod
    def confirm(self, entry: ConflictEntry) -> Decision:
        """Decide what to do with a write that conflicts with the disk."""

    @abstractmethod
    def show_diff(self, entry: ConflictEntry, diff: str) -> None:
        """Present a unified diff for ``entry``."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
