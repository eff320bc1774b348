"""Keyed text store persisted on the local device (one file per key)."""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

DEFAULT_CACHE_DIR = Path.home() / ".pilotlog" / "cache"


def _key_filename(key: str) -> str:
    """Map a store key to a safe file name."""
    sanitized = re.sub(r"[^a-zA-Z0-9._-]", "_", key).lstrip(".")
    return (sanitized or "_") + ".json"


class FileStore:
    """Persistent key/value store for serialized text values.

    Survives process restarts but is scoped to one machine, like browser
    local storage. Values are replaced whole: a write goes to a temporary
    file which is then renamed over the old one, so an interrupted write
    leaves either the previous value or nothing readable.

    I/O failures raise OSError; callers decide whether they matter.
    """

    def __init__(self, directory: Path | str | None = None):
        if directory is None:
            directory = os.environ.get("PILOTLOG_CACHE_DIR") or DEFAULT_CACHE_DIR
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / _key_filename(key)

    def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
