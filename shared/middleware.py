from __future__ import annotations

import time
import uuid

from fastapi import Request

from shared.constants import NO_STORE_HEADERS
from shared.logger import get_logger, set_request_id, reset_request_id
from shared.utils import now_iso

_API_LOGGER = get_logger("api")


async def timing_middleware(request: Request, call_next):
    # Set start time BEFORE route executes
    request.state.start_time = time.perf_counter()

    response = await call_next(request)

    return response


def _duration_since(request: Request, fallback_start: float) -> float:
    start_time = getattr(request.state, "start_time", None)
    if isinstance(start_time, (int, float)):
        return time.perf_counter() - start_time
    return time.perf_counter() - fallback_start


async def no_store_middleware(request: Request, call_next):
    response = await call_next(request)

    no_store_paths = getattr(request.app.state, "no_store_paths", set())
    if request.url.path in no_store_paths:
        response.headers.update(NO_STORE_HEADERS)

    return response


async def request_response_logger_middleware(request: Request, call_next):
    start_time = time.perf_counter()
    request_id = uuid.uuid4().hex[:8]
    request.state.request_id = request_id
    token = set_request_id(request_id)

    try:
        response = await call_next(request)

        duration_ms = int(_duration_since(request, start_time) * 1000)
        request_host = request.headers.get("x-forwarded-host") or request.headers.get(
            "host"
        )

        _API_LOGGER.info(
            "HTTP request/response",
            extra={
                "extra_fields": {
                    "event": "http_request_response",
                    "timestamp": now_iso(),
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    "request_host": request_host,
                }
            },
        )

        response.headers["X-Request-Id"] = request_id
        return response
    finally:
        reset_request_id(token)
