import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from bizdir.dependencies import BusinessStoreDep
from bizdir.exceptions.custom import StoreUnavailableError
from bizdir.schemas.responses import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(store: BusinessStoreDep):
    now = datetime.now(timezone.utc)
    try:
        await store.ping()
    except StoreUnavailableError as exc:
        logger.warning("Health check failed: %s", exc.message)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "timestamp": now.isoformat(), "store": "disconnected"},
        )
    return HealthResponse(status="healthy", timestamp=now, store="connected")
