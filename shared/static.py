from __future__ import annotations

from pathlib import Path

from shared.constants import STATIC_MIME_TYPES


def resolve_static_file(static_dir: Path, request_path: str) -> tuple[Path, str] | None:
    """
    (file, media type) for an allow-listed file under static_dir, else None.
    """
    relative = request_path.lstrip("/") or "index.html"
    base = static_dir.resolve()
    candidate = (base / relative).resolve()

    if not candidate.is_relative_to(base):
        return None

    media_type = STATIC_MIME_TYPES.get(candidate.suffix.lower())
    if media_type is None or not candidate.is_file():
        return None

    return candidate, media_type
