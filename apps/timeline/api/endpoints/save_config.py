from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.logger import get_logger
from apps.timeline.api.deps import get_settings
from apps.timeline.api.helpers.config import TimelineSettings

router = APIRouter()
logger = get_logger("Timeline Config")


# ============================================================
# SAVE CONFIG
# ============================================================


class SaveConfigRequest(BaseModel):
    sheetId: str | None = None


@router.post("/save-config")
def save_config(
    payload: SaveConfigRequest | None = None,
    settings: TimelineSettings = Depends(get_settings),
):
    sheet_id = (payload.sheetId or "").strip() if payload else ""
    if not sheet_id:
        return JSONResponse(status_code=400, content={"error": "Missing sheetId"})

    persisted = settings.override_store.save(sheet_id)

    logger.info(
        "Sheet id updated",
        extra={
            "extra_fields": {
                "event": "sheet_id_updated",
                "sheet_id": sheet_id,
                "persisted": persisted,
            }
        },
    )

    result: dict[str, object] = {"success": True, "message": "Updated in session"}
    if not persisted:
        result["note"] = (
            "Config storage is read-only; the new sheet id applies until "
            "the server restarts."
        )
    return result
