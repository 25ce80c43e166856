from __future__ import annotations

from datetime import datetime
import os
from pathlib import Path
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from shared.constants import BASE_DIR, ENV_FILE, TIMEZONE

LOCAL_SECRETS_DIR = BASE_DIR / "etc" / "secrets"


# ======================================================
# TIME
# ======================================================


def get_timezone() -> str:
    value = os.getenv("TIMEZONE", "").strip()
    return value or TIMEZONE


def now_iso() -> str:
    return datetime.now(ZoneInfo(get_timezone())).isoformat()


# ======================================================
# ENV FILE
# ======================================================


def get_env_file_path() -> Path:
    return Path(os.getenv("ENV_FILE") or ENV_FILE)


def load_env() -> None:
    path = get_env_file_path()
    if path.is_file():
        load_dotenv(path, override=False)


# ======================================================
# SECRET FILE RESOLUTION
# ======================================================


def resolve_secret_path(env_var: str, filename: str) -> Path | None:
    """
    Find a secret file: the path named by env_var first, then
    /etc/secrets/<filename>, then etc/secrets/<filename>.
    Returns None when none of them exists.
    """
    env_value = (os.getenv(env_var) or "").strip()
    if env_value and Path(env_value).is_file():
        return Path(env_value)

    for base in (Path("/etc/secrets"), LOCAL_SECRETS_DIR):
        candidate = base / filename
        if candidate.is_file():
            return candidate

    return None
