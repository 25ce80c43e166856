# shared/logger.py

from __future__ import annotations

import logging
import json
import sys
import os
import uuid
import time
from contextvars import ContextVar
from datetime import datetime
from logging.handlers import RotatingFileHandler

import pytz

from shared.constants import (
    TIMEZONE,
    LOGGING_ENABLED,
    LOG_LEVEL,
    LOG_DIR,
    LOG_FILE_NAME,
    LOG_MAX_BYTES,
    LOG_BACKUP_COUNT,
    LOG_RETENTION_DAYS,
)

# ======================================================
# TIMEZONE
# ======================================================

LOCAL_TZ = pytz.timezone(TIMEZONE)

# ======================================================
# RUN CONTEXT
# ======================================================

RUN_ID = uuid.uuid4().hex
_RUN_START_TIME = time.monotonic()

# ======================================================
# REQUEST CONTEXT
# ======================================================

_REQUEST_ID: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str) -> ContextVar.Token:
    return _REQUEST_ID.set(request_id)


def reset_request_id(token: ContextVar.Token) -> None:
    _REQUEST_ID.reset(token)


def get_request_id() -> str | None:
    return _REQUEST_ID.get()


def _env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")

# ======================================================
# DURATION FORMATTER
# ======================================================

def format_duration(seconds: float) -> str:
    """
    Format duration as HH:mm:ss:ms (no days).
    """
    total_ms = int(seconds * 1000)
    total_seconds, ms = divmod(total_ms, 1000)
    total_minutes, sec = divmod(total_seconds, 60)
    hour, minute = divmod(total_minutes, 60)
    return f"{hour:02}:{minute:02}:{sec:02}:{ms:03}"

# ======================================================
# FORMATTER
# ======================================================

class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log: dict = {
            "timestamp": datetime.now(LOCAL_TZ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "run_id": RUN_ID,
        }

        request_id = get_request_id()
        if request_id:
            log["request_id"] = request_id

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            log.update(extra_fields)

        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)

        return json.dumps(log, default=str, ensure_ascii=False)

# ======================================================
# HANDLERS
# ======================================================

def _create_file_handler() -> logging.Handler | None:
    if not _env_flag("LOG_FILE_ENABLED"):
        return None

    os.makedirs(LOG_DIR, exist_ok=True)

    handler = RotatingFileHandler(
        filename=os.path.join(LOG_DIR, LOG_FILE_NAME),
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(JsonFormatter())
    handler.setLevel(LOG_LEVEL)
    handler.name = "file"
    return handler


def _create_console_handler() -> logging.Handler | None:
    if not _env_flag("LOG_CONSOLE_ENABLED"):
        return None

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    handler.setLevel(LOG_LEVEL)
    handler.name = "console"
    return handler

# ======================================================
# LOGGER FACTORY
# ======================================================

def get_logger(name: str = "app") -> logging.Logger:
    """
    Get or create a logger.

    - File logging is on unless LOG_FILE_ENABLED is false
    - Console logging is on unless LOG_CONSOLE_ENABLED is false
    """
    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)

    if not LOGGING_ENABLED:
        logger.disabled = True
        return logger

    for handler_name, factory in (
        ("file", _create_file_handler),
        ("console", _create_console_handler),
    ):
        if any(getattr(h, "name", None) == handler_name for h in logger.handlers):
            continue
        handler = factory()
        if handler is not None:
            logger.addHandler(handler)

    logger.propagate = False
    return logger

# ======================================================
# LOG RETENTION CLEANUP
# ======================================================

def cleanup_old_logs() -> None:
    """
    Delete log files older than LOG_RETENTION_DAYS.
    Safe and non-fatal.
    """
    if not LOGGING_ENABLED or not os.path.isdir(LOG_DIR):
        return

    retention_seconds = LOG_RETENTION_DAYS * 24 * 60 * 60
    now = time.time()

    for filename in os.listdir(LOG_DIR):
        file_path = os.path.join(LOG_DIR, filename)
        if not os.path.isfile(file_path):
            continue

        try:
            if now - os.path.getmtime(file_path) > retention_seconds:
                os.remove(file_path)
        except OSError:
            continue

# ======================================================
# RUN BOUNDARY HELPERS
# ======================================================

def log_run_start() -> None:
    """
    Mark the start of a run and perform retention cleanup.
    """
    cleanup_old_logs()

    logger = get_logger("system")
    logger.info(
        "===== RUN START =====",
        extra={
            "extra_fields": {
                "event": "run_start",
            }
        },
    )


def log_run_end() -> None:
    """
    Mark the end of a run with formatted duration.
    """
    duration = format_duration(time.monotonic() - _RUN_START_TIME)

    logger = get_logger("system")
    logger.info(
        "===== RUN END =====",
        extra={
            "extra_fields": {
                "event": "run_end",
                "duration": duration,
            }
        },
    )
