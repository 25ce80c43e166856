from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse, JSONResponse

from shared.constants import STATIC_DIR
from shared.exception_handlers import register_exception_handlers
from shared.logger import log_run_start, log_run_end
from shared.middleware import (
    timing_middleware,
    no_store_middleware,
    request_response_logger_middleware,
)
from shared.static import resolve_static_file
from shared.utils import load_env
from apps.timeline.api.helpers.config import TimelineSettings, load_settings
from apps.timeline.api.router import router as timeline_router

load_env()


@asynccontextmanager
async def lifespan(app: FastAPI):
    log_run_start()
    if getattr(app.state, "settings", None) is None:
        app.state.settings = load_settings()
    yield
    log_run_end()


def create_app(
    settings: TimelineSettings | None = None,
    *,
    static_dir: Path = STATIC_DIR,
) -> FastAPI:
    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.static_dir = Path(static_dir)
    app.state.no_store_paths = {"/api/data"}

    app.middleware("http")(timing_middleware)
    app.middleware("http")(no_store_middleware)
    app.middleware("http")(request_response_logger_middleware)
    register_exception_handlers(app, logger_name="Root")

    app.include_router(timeline_router)

    @app.get("/ping")
    def ping():
        return {"status": "ok"}

    # Registered last so /api routes match first
    @app.get("/{path:path}", include_in_schema=False)
    def static_files(path: str):
        resolved = resolve_static_file(app.state.static_dir, path)
        if resolved is None:
            return JSONResponse(status_code=404, content={"error": "Not Found"})

        file_path, media_type = resolved
        return FileResponse(file_path, media_type=media_type)

    return app


app = create_app()


# This is important for Vercel
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
