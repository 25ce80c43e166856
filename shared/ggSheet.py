from __future__ import annotations

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

# =====================================================
# CONFIG
# =====================================================

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]


class SheetFetchError(RuntimeError):
    pass


class SheetsNotConfiguredError(RuntimeError):
    pass


# =====================================================
# CLIENT
# =====================================================

def build_sheets_service(credentials_info: dict[str, str]):
    """
    Create a Google Sheets service from service account key material.
    """
    try:
        credentials = service_account.Credentials.from_service_account_info(
            credentials_info,
            scopes=SCOPES,
        )
    except (ValueError, GoogleAuthError) as exc:
        raise SheetFetchError(f"Invalid service account credentials: {exc}") from exc

    return build(
        "sheets",
        "v4",
        credentials=credentials,
        cache_discovery=False,
    )


def _execute(request) -> dict:
    try:
        return request.execute()
    except HttpError as exc:
        reason = getattr(exc, "reason", None)
        raise SheetFetchError(reason or str(exc)) from exc
    except (GoogleAuthError, httplib2.HttpLib2Error, OSError) as exc:
        raise SheetFetchError(str(exc)) from exc


# =====================================================
# READERS
# =====================================================

def get_spreadsheet_meta(service, spreadsheet_id: str) -> dict:
    """
    Spreadsheet properties and sheet list, without cell data.
    """
    return _execute(
        service.spreadsheets().get(
            spreadsheetId=spreadsheet_id,
            includeGridData=False,
        )
    )


def read_values(
    service,
    spreadsheet_id: str,
    range_name: str,
) -> list[list[str]]:
    """
    Low-level range reader.
    Returns raw rows; trailing empty cells are omitted by the API.
    """
    result = _execute(
        service.spreadsheets()
        .values()
        .get(
            spreadsheetId=spreadsheet_id,
            range=range_name,
        )
    )
    return result.get("values", [])


def column_letter(index: int) -> str:
    """
    Zero-based column index to A1 letters: 0 -> A, 25 -> Z, 51 -> AZ.
    """
    if index < 0:
        raise ValueError("column index must be >= 0")

    letters = ""
    n = index + 1
    while n:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def a1_range(sheet_title: str, rows: int, columns: int) -> str:
    quoted = sheet_title.replace("'", "''")
    return f"'{quoted}'!A1:{column_letter(columns - 1)}{rows}"
