from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path

from dotenv import dotenv_values

from shared.constants import (
    BASELINE_ENV_VARS,
    CREDENTIALS_FILE,
    DEFAULT_SHEET_ID,
    OVERRIDE_STORE_FILE,
    TARGET_SHEET_TITLE,
)
from shared.ggSheet import SheetsNotConfiguredError
from shared.json_store import JsonFileStore
from shared.logger import get_logger
from shared.utils import get_env_file_path, now_iso, resolve_secret_path

logger = get_logger("Timeline Config")

REQUIRED_CREDENTIAL_FIELDS = ("client_email", "private_key")


# ======================================================
# OVERRIDE STORE
# ======================================================


class SheetOverrideStore:
    """
    Runtime spreadsheet override.

    The file is re-read on every lookup. When it cannot be written, the
    id saved last is kept in memory for the rest of the process.
    """

    def __init__(self, path: Path) -> None:
        self._store = JsonFileStore(path)
        self._session_sheet_id: str | None = None

    @property
    def path(self) -> Path:
        return self._store.path

    def get_sheet_id(self) -> str | None:
        if self._session_sheet_id:
            return self._session_sheet_id

        value = self._store.load_root().get("SHEET_ID")
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    def save(self, sheet_id: str) -> bool:
        """
        Persist sheet_id. Returns False when only the session holds it.
        """
        payload = {"SHEET_ID": sheet_id, "updatedAt": now_iso()}
        try:
            self._store.write_root(payload)
        except OSError as exc:
            self._session_sheet_id = sheet_id
            logger.warning(
                "Override store not writable, keeping sheet id for this session",
                extra={
                    "extra_fields": {
                        "event": "override_store_write_failed",
                        "path": str(self.path),
                        "error": str(exc),
                    }
                },
            )
            return False

        self._session_sheet_id = None
        return True


# ======================================================
# SETTINGS
# ======================================================


@dataclass(frozen=True)
class TimelineSettings:
    credentials: dict[str, str] | None
    override_store: SheetOverrideStore
    env_file: Path
    fallback_sheet_id: str = DEFAULT_SHEET_ID
    target_sheet: str = TARGET_SHEET_TITLE
    baselines: dict[str, int] = field(default_factory=dict)


def _parse_int(value: str | None) -> int:
    # Whole value must be an integer; "12abc" is 0, not 12
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def load_baselines() -> dict[str, int]:
    return {
        key: _parse_int(os.getenv(env_var, "0"))
        for key, env_var in BASELINE_ENV_VARS.items()
    }


def load_settings() -> TimelineSettings:
    store_path = Path(os.getenv("OVERRIDE_STORE_PATH") or OVERRIDE_STORE_FILE)
    settings = TimelineSettings(
        credentials=load_credentials(),
        override_store=SheetOverrideStore(store_path),
        env_file=get_env_file_path(),
        baselines=load_baselines(),
    )

    logger.info(
        "Timeline settings loaded",
        extra={
            "extra_fields": {
                "event": "settings_loaded",
                "credentials": settings.credentials is not None,
                "override_store": str(store_path),
                "env_file": str(settings.env_file),
            }
        },
    )
    return settings


# ======================================================
# SHEET ID
# ======================================================


def _read_env_file_value(path: Path, key: str) -> str | None:
    if not path.is_file():
        return None
    try:
        values = dotenv_values(path)
    except (OSError, UnicodeDecodeError):
        return None
    value = values.get(key)
    return value.strip() if value and value.strip() else None


def resolve_sheet_id(settings: TimelineSettings) -> str:
    """
    Spreadsheet to read for this request. First match wins:
    override store (session value, then file), env file, process env,
    fallback constant.
    """
    override = settings.override_store.get_sheet_id()
    if override:
        return override

    env_file_value = _read_env_file_value(settings.env_file, "SHEET_ID")
    if env_file_value:
        return env_file_value

    process_value = (os.getenv("SHEET_ID") or "").strip()
    if process_value:
        return process_value

    return settings.fallback_sheet_id


# ======================================================
# CREDENTIALS
# ======================================================


def _normalize_credentials(data: object) -> dict[str, str] | None:
    if not isinstance(data, dict):
        return None

    for key in REQUIRED_CREDENTIAL_FIELDS:
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            return None

    credentials = dict(data)
    credentials["private_key"] = credentials["private_key"].replace("\\n", "\n")
    return credentials


def _log_credential_source_error(source: str, error: str) -> None:
    logger.warning(
        "Credentials source ignored",
        extra={
            "extra_fields": {
                "event": "credentials_source_invalid",
                "source": source,
                "error": error,
            }
        },
    )


def _credentials_from_file(path: Path) -> dict[str, str] | None:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        _log_credential_source_error(str(path), str(exc))
        return None

    credentials = _normalize_credentials(data)
    if credentials is None:
        _log_credential_source_error(str(path), "incomplete service account key")
    return credentials


def _credentials_from_env(env_var: str) -> dict[str, str] | None:
    raw = (os.getenv(env_var) or "").strip()
    if not raw:
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        _log_credential_source_error(env_var, str(exc))
        return None

    credentials = _normalize_credentials(data)
    if credentials is None:
        _log_credential_source_error(env_var, "incomplete service account key")
    return credentials


def load_credentials(
    *,
    path_env_var: str = "GOOGLE_APPLICATION_CREDENTIALS",
    json_env_var: str = "GOOGLE_CREDENTIALS",
) -> dict[str, str] | None:
    """
    Service account key from a local JSON file, else from JSON text in
    an env var. Unusable sources are logged and skipped; None means the
    server is not configured.
    """
    path = resolve_secret_path(path_env_var, CREDENTIALS_FILE)
    if path is not None:
        credentials = _credentials_from_file(path)
        if credentials is not None:
            return credentials

    return _credentials_from_env(json_env_var)


def require_credentials(settings: TimelineSettings) -> dict[str, str]:
    if settings.credentials is None:
        raise SheetsNotConfiguredError(
            "Google service account credentials are not configured. "
            "Set GOOGLE_CREDENTIALS or provide service-account.json."
        )
    return settings.credentials
