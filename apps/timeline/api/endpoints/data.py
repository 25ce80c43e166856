from fastapi import APIRouter, Depends

from apps.timeline.api.deps import get_settings, get_sheets_service
from apps.timeline.api.helpers.config import TimelineSettings, resolve_sheet_id
from apps.timeline.api.helpers.ggSheet import get_timeline_data

router = APIRouter()


@router.get("/data")
def get_data(
    settings: TimelineSettings = Depends(get_settings),
    service=Depends(get_sheets_service),
):
    # Not cached: save-config may change it between polls
    sheet_id = resolve_sheet_id(settings)
    return get_timeline_data(service, sheet_id, settings)
