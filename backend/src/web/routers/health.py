"""
Health Router - API endpoints for health checks
"""
import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/live")
async def health_live():
    """Liveness probe: server process is up"""
    return {"status": "live"}


@router.get("/ready")
async def health_ready(request: Request):
    """Readiness probe: the status database answers queries"""
    db = getattr(request.app.state, "db", None)
    ready = False
    if db is not None and db.is_initialized:
        try:
            async with db.transaction():
                await db.fetch_one("SELECT 1")
            ready = True
        except Exception:
            logger.exception("Readiness check failed")
    status_code = 200 if ready else 503
    return JSONResponse(
        status_code=status_code,
        content={"status": "ready" if ready else "not_ready", "database": ready},
    )
