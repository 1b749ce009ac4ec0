from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from studybudget.core import configuration
from studybudget.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/api/config")
async def get_config() -> dict[str, Any]:
    return configuration.build_config_context()


@router.post("/api/config")
async def save_config(request: Request, payload: dict[str, Any]) -> JSONResponse:
    errors, updates = configuration.apply_config_updates(payload)
    if errors:
        logger.warning("[CONFIG] Rejected configuration update: %s", ", ".join(sorted(errors)))
        return JSONResponse(status_code=400, content={"status": "invalid", "errors": errors})

    configuration.apply_runtime_updates(request.app, updates)
    logger.info("[CONFIG] Saved settings: %s", ", ".join(sorted(updates)) or "(none)")
    return JSONResponse(content={"status": "saved", "updated": sorted(updates)})
