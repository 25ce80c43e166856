from fastapi import APIRouter

from apps.timeline.api.endpoints import data, save_config

router = APIRouter(prefix="/api")
router.include_router(data.router, tags=["data"])
router.include_router(save_config.router, tags=["config"])
