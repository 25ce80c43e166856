from __future__ import annotations

import os
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.constants import NO_STORE_HEADERS
from shared.ggSheet import SheetFetchError, SheetsNotConfiguredError
from shared.logger import get_logger


def _format_loc(loc: object) -> str:
    if not isinstance(loc, (list, tuple)):
        return str(loc)
    parts: list[str] = []
    for item in loc:
        if item == "body":
            continue
        if isinstance(item, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{item}]"
            else:
                parts.append(f"[{item}]")
        else:
            parts.append(str(item))
    return ".".join(parts) if parts else "body"


def register_exception_handlers(app: FastAPI, *, logger_name: str) -> None:
    logger = get_logger(logger_name)

    @app.exception_handler(SheetsNotConfiguredError)
    async def not_configured_exception_handler(
        request: Request,
        exc: SheetsNotConfiguredError,
    ) -> JSONResponse:
        logger.error(
            "Server not configured",
            extra={
                "extra_fields": {
                    "path": str(request.url.path),
                    "method": request.method,
                    "error": str(exc),
                }
            },
        )
        return JSONResponse(
            status_code=500,
            content={"error": "SERVER_NOT_CONFIGURED", "message": str(exc)},
        )

    @app.exception_handler(SheetFetchError)
    async def sheet_fetch_exception_handler(
        request: Request,
        exc: SheetFetchError,
    ) -> JSONResponse:
        logger.error(
            "Spreadsheet fetch failed",
            extra={
                "extra_fields": {
                    "path": str(request.url.path),
                    "method": request.method,
                    "error": str(exc),
                }
            },
        )
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            extra={
                "extra_fields": {
                    "path": str(request.url.path),
                    "method": request.method,
                    "error": str(exc),
                }
            },
        )

        response_content = {
            "error": str(exc) or "Internal Server Error",
            "error_type": exc.__class__.__name__,
            "path": str(request.url.path),
            "method": request.method,
            "request_id": getattr(request.state, "request_id", None),
        }

        if os.getenv("APP_ENV", "").lower() in {"local", "dev", "development"}:
            response_content["traceback"] = traceback.format_exc().splitlines()

        headers = None
        if request.url.path in getattr(app.state, "no_store_paths", set()):
            headers = NO_STORE_HEADERS

        return JSONResponse(status_code=500, content=response_content, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        messages: list[str] = []
        for err in exc.errors():
            loc = _format_loc(err.get("loc"))
            msg = err.get("msg") or "Invalid value"
            messages.append(f"{loc}: {msg}" if loc != "body" else msg)

        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid payload",
                "message": "; ".join(messages) if messages else "Invalid request payload",
            },
        )
