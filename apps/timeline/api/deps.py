from __future__ import annotations

from fastapi import Depends, Request

from shared.ggSheet import build_sheets_service
from apps.timeline.api.helpers.config import TimelineSettings, require_credentials


def get_settings(request: Request) -> TimelineSettings:
    return request.app.state.settings


def get_sheets_service(settings: TimelineSettings = Depends(get_settings)):
    return build_sheets_service(require_credentials(settings))
