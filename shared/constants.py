# shared/constants.py
from pathlib import Path

# =========================
# GENERAL CONFIGS
# =========================
TIMEZONE = "Asia/Ho_Chi_Minh"

BASE_DIR = Path(__file__).resolve().parents[1]
STATIC_DIR = BASE_DIR / "static"

# =========================
# SPREADSHEET
# =========================

# Used when no override, env file or process env value is set
DEFAULT_SHEET_ID = "1XTkvkPZ5pNSJsXIPF5HwPDxy2vIVY5uFmvhS_hCJl9c"

TARGET_SHEET_TITLE = "Project Timeline"

SHEET_MAX_ROWS = 5000
SHEET_MAX_COLUMNS = 52  # A..AZ

# Runtime override written by /api/save-config (relative to cwd)
OVERRIDE_STORE_FILE = "localstorage.json"

# Line-oriented env file consulted for SHEET_ID (relative to cwd)
ENV_FILE = ".env"

# Service account key file name looked up in /etc/secrets and etc/secrets
CREDENTIALS_FILE = "service-account.json"

# metadata key -> env var
BASELINE_ENV_VARS = {
    "total": "BASE_TOTAL",
    "hoanThanh": "BASE_HOAN_THANH",
    "dangThucHien": "BASE_DANG_THUC_HIEN",
    "sanSangCheck": "BASE_SAN_SANG_CHECK",
    "chuaBatDau": "BASE_CHUA_BAT_DAU",
    "feedback": "BASE_FEEDBACK",
}

# =========================
# HTTP
# =========================

NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

STATIC_MIME_TYPES = {
    ".html": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".json": "application/json",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
    ".txt": "text/plain",
}

# =====================
# LOGGING CONFIG
# =====================

# Global switch
LOGGING_ENABLED = True

# Logging level
# DEBUG | INFO | WARNING | ERROR | CRITICAL
LOG_LEVEL = "INFO"

# Directory for all logs (anchored to repo root)
LOG_DIR = str(BASE_DIR / "logs")

LOG_FILE_NAME = "api.log"
LOG_MAX_BYTES = 1 * 1024 * 1024  # 1 MB per file
LOG_BACKUP_COUNT = 5

# Retention policy
LOG_RETENTION_DAYS = 7  # Delete logs older than N days
