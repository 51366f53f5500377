"""
Generator storage — a key/value section of the project's rc file.

The rc file (``.scaffold-rc.json`` in the destination root) holds one
JSON object per generator name. A Storage instance owns one of those
sections. The file is read on first access and rewritten atomically
(temp file, then rename) after every mutation, so a value is durable
as soon as ``set`` returns.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class Storage:
    """Persisted key/value record scoped to one destination root.

    Args:
        name: Section name inside the rc file (usually the generator name).
        path: Path of the rc file.
    """

    def __init__(self, name: str, path: Path):
        self.name = name
        self.path = Path(path)
        self._section: dict[str, Any] | None = None

    def __repr__(self) -> str:
        return f"<Storage name={self.name!r} path={str(self.path)!r}>"

    # ── Reading ─────────────────────────────────────────────────

    @property
    def _store(self) -> dict[str, Any]:
        if self._section is None:
            section = self._read_file().get(self.name, {})
            self._section = section if isinstance(section, dict) else {}
        return self._section

    def get(self, key: str, default: Any = None) -> Any:
        return self._store.get(key, default)

    def get_all(self) -> dict[str, Any]:
        """Return a copy of the whole section."""
        return dict(self._store)

    def __contains__(self, key: str) -> bool:
        return key in self._store

    # ── Writing ─────────────────────────────────────────────────

    def set(self, key: str | dict[str, Any], value: Any = None) -> Any:
        """Set one key, or merge a mapping of keys, then save.

        A value that cannot be written as JSON raises TypeError and
        leaves the section unchanged.

        Returns:
            The stored value (or the merged mapping).
        """
        if isinstance(key, dict):
            self._commit({**self._store, **key})
            return key

        self._commit({**self._store, key: value})
        return value

    def delete(self, key: str) -> None:
        section = dict(self._store)
        section.pop(key, None)
        self._commit(section)

    def defaults(self, values: dict[str, Any]) -> dict[str, Any]:
        """Set every key of ``values`` that is not stored yet."""
        missing = {k: v for k, v in values.items() if k not in self._store}
        if missing:
            self.set(missing)
        return self.get_all()

    def save(self) -> None:
        """Write this section back, keeping the other sections of the file."""
        self._commit(self._store)

    def _commit(self, section: dict[str, Any]) -> None:
        data = self._read_file()
        data[self.name] = section
        content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

        self.path.parent.mkdir(parents=True, exist_ok=True)
        _fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent,
            prefix=".scaffold-rc_",
            suffix=".tmp",
        )
        tmp = Path(tmp_path)
        try:
            with open(_fd, "w", encoding="utf-8") as f:
                f.write(content)
            tmp.replace(self.path)
        except Exception as e:
            tmp.unlink(missing_ok=True)
            logger.error("Failed to save storage to %s: %s", self.path, e)
            raise

        self._section = section
        logger.debug("Storage '%s' saved to %s", self.name, self.path)

    # ── Internals ───────────────────────────────────────────────

    def _read_file(self) -> dict[str, Any]:
        if not self.path.is_file():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning("Corrupt rc file %s: %s — starting fresh", self.path, e)
            return {}
        except OSError as e:
            logger.warning("Cannot read rc file %s: %s — starting fresh", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring rc file %s: expected a JSON object", self.path)
            return {}
        return data
