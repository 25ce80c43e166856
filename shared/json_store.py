from __future__ import annotations

import json
import os
from pathlib import Path


class JsonFileStore:
    """
    A small JSON object persisted as a whole file.

    Reads always go to disk. Writes replace the file atomically, so a
    concurrent reader sees either the old or the new document.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load_root(self) -> dict[str, object]:
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, ValueError):
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def write_root(self, data: dict[str, object]) -> None:
        """Raises OSError when the location is not writable."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(f"{self.path.suffix}.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, ensure_ascii=False)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self.path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
