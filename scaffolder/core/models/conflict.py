"""
Conflict models — pending write intents and their outcomes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class ConflictEntry(BaseModel):
    """A file write requested by a step, waiting for resolution."""

    path: Path
    content: str | bytes

    @property
    def data(self) -> bytes:
        """Proposed content as bytes (str is encoded as UTF-8)."""
        if isinstance(self.content, bytes):
            return self.content
        return self.content.encode("utf-8")


class ConflictResult(BaseModel):
    """How one write intent was resolved.

    Status values:
        create:    target did not exist, written.
        identical: target already had this content, nothing written.
        force:     target differed, written without asking (force mode).
        write:     target differed, user chose to overwrite.
        skip:      target differed, user chose to keep it.
    """

    path: Path
    status: Literal["create", "identical", "force", "write", "skip"]

    @property
    def written(self) -> bool:
        return self.status in ("create", "force", "write")
