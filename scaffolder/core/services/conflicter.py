"""
Conflicter — reconciles proposed writes with the file system.

Steps never write files directly: they queue intents here, and the run
engine drains the queue with one ``resolve()`` pass after every step.
New files and identical files need no interaction; anything else is
handed to the prompter unless force mode is on.
"""

from __future__ import annotations

import difflib
import logging
from pathlib import Path

from scaffolder.adapters.base import Decision, Prompter
from scaffolder.core.models.conflict import ConflictEntry, ConflictResult

logger = logging.getLogger(__name__)

# Longest diff shown before it is truncated
_MAX_DIFF_LINES = 200


class Conflicter:
    """FIFO queue of write intents owned by the currently running step.

    Args:
        prompter: Confirmation collaborator; a ConsolePrompter is used
            when omitted.
        force: Overwrite conflicting files without asking.
    """

    def __init__(self, prompter: Prompter | None = None, force: bool = False):
        if prompter is None:
            from scaffolder.adapters.console import ConsolePrompter

            prompter = ConsolePrompter()
        self.prompter = prompter
        self.force = force
        self.conflicts: list[ConflictEntry] = []

    def add(self, path: Path, content: str | bytes) -> ConflictEntry:
        """Queue a write intent."""
        entry = ConflictEntry(path=path, content=content)
        self.conflicts.append(entry)
        return entry

    def collision(self, entry: ConflictEntry) -> str:
        """Classify an entry against the disk: create, identical or conflict."""
        if not entry.path.exists():
            return "create"
        if entry.path.is_file() and entry.path.read_bytes() == entry.data:
            return "identical"
        return "conflict"

    def resolve(self) -> list[ConflictResult]:
        """Drain the queue in order, writing what should be written.

        Returns:
            One ConflictResult per queued entry, in queue order.

        Raises:
            OSError: If a write fails. Entries still queued behind it are
                dropped.
        """
        results: list[ConflictResult] = []
        try:
            while self.conflicts:
                entry = self.conflicts.pop(0)
                result = self._resolve_entry(entry)
                logger.info("%-9s %s", result.status, result.path)
                results.append(result)
        except Exception:
            if self.conflicts:
                logger.warning("Dropping %d queued write(s) after a failed write", len(self.conflicts))
                self.conflicts.clear()
            raise
        return results

    def diff(self, entry: ConflictEntry) -> str:
        """Unified diff between the file on disk and the proposed content."""
        try:
            old = entry.path.read_text(encoding="utf-8")
            new = entry.data.decode("utf-8")
        except UnicodeDecodeError:
            return f"Binary files {entry.path} differ"

        diff_lines = list(difflib.unified_diff(
            old.splitlines(),
            new.splitlines(),
            fromfile=f"a/{entry.path.name}",
            tofile=f"b/{entry.path.name}",
            lineterm="",
        ))
        text = "\n".join(diff_lines[:_MAX_DIFF_LINES])
        if len(diff_lines) > _MAX_DIFF_LINES:
            text += f"\n... ({len(diff_lines) - _MAX_DIFF_LINES} more lines)"
        return text

    # ── Internals ───────────────────────────────────────────────

    def _resolve_entry(self, entry: ConflictEntry) -> ConflictResult:
        status = self.collision(entry)

        if status == "identical":
            return ConflictResult(path=entry.path, status="identical")

        if status == "create":
            self._write(entry)
            return ConflictResult(path=entry.path, status="create")

        if self.force:
            self._write(entry)
            return ConflictResult(path=entry.path, status="force")

        while True:
            decision = self.prompter.confirm(entry)
            if decision == Decision.DIFF:
                self.prompter.show_diff(entry, self.diff(entry))
                continue
            break

        if decision == Decision.SKIP:
            return ConflictResult(path=entry.path, status="skip")

        if decision == Decision.WRITE_ALL:
            self.force = True
        self._write(entry)
        return ConflictResult(path=entry.path, status="write")

    def _write(self, entry: ConflictEntry) -> None:
        entry.path.parent.mkdir(parents=True, exist_ok=True)
        entry.path.write_bytes(entry.data)
        logger.debug("Wrote %s (%d bytes)", entry.path, len(entry.data))
