from __future__ import annotations

from shared.constants import SHEET_MAX_COLUMNS, SHEET_MAX_ROWS
from shared.ggSheet import (
    SheetFetchError,
    a1_range,
    get_spreadsheet_meta,
    read_values,
)
from shared.logger import get_logger
from shared.utils import now_iso
from apps.timeline.api.helpers.config import TimelineSettings
from apps.timeline.api.helpers.dataTransform import transform_rows

logger = get_logger("Timeline Sheet")


def pick_target_sheet(meta: dict, title: str) -> dict:
    """
    Sheet properties for the exact title, else the first sheet.
    """
    sheets = meta.get("sheets") or []
    if not sheets:
        raise SheetFetchError("Spreadsheet has no sheets")

    for sheet in sheets:
        properties = sheet.get("properties", {})
        if properties.get("title") == title:
            return properties
    return sheets[0].get("properties", {})


def read_header_row(service, spreadsheet_id: str, title: str) -> tuple[str, list[str]]:
    meta = get_spreadsheet_meta(service, spreadsheet_id)
    sheet_name = pick_target_sheet(meta, title).get("title", "")
    rows = read_values(
        service,
        spreadsheet_id,
        a1_range(sheet_name, 1, SHEET_MAX_COLUMNS),
    )
    return sheet_name, (rows[0] if rows else [])


def get_timeline_data(
    service,
    spreadsheet_id: str,
    settings: TimelineSettings,
) -> dict[str, object]:
    """
    Read the target sheet and shape it for the dashboard.

    NOTE:
    - One metadata call and one values call, no retries
    """
    meta = get_spreadsheet_meta(service, spreadsheet_id)
    sheet_name = pick_target_sheet(meta, settings.target_sheet).get("title", "")

    rows = read_values(
        service,
        spreadsheet_id,
        a1_range(sheet_name, SHEET_MAX_ROWS, SHEET_MAX_COLUMNS),
    )
    data = transform_rows(rows)

    logger.info(
        "Timeline sheet read",
        extra={
            "extra_fields": {
                "event": "timeline_read",
                "spreadsheet_id": spreadsheet_id,
                "sheet": sheet_name,
                "raw_rows": len(rows),
                "records": len(data),
            }
        },
    )

    return {
        "data": data,
        "metadata": {
            "spreadsheet": meta.get("properties", {}).get("title", ""),
            "sheet": sheet_name,
            "sheetId": spreadsheet_id,
            "count": len(data),
            "updatedAt": now_iso(),
            "baselines": dict(settings.baselines),
        },
    }
