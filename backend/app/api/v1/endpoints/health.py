"""
Health Check Endpoints

- /health        - Basic liveness (app is running)
- /health/ready  - Readiness check (database reachable, payments configured)
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from datetime import datetime, timezone
from typing import Dict, Any
import time

from sqlalchemy import text

from app.core.config import Settings, get_settings
from app.core.database import get_session_local
from app.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database() -> Dict[str, Any]:
    """Check database connectivity and that the ledger tables exist"""
    start = time.time()
    try:
        session_factory = get_session_local()
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))

            try:
                await session.execute(text("SELECT COUNT(*) FROM event_registrations"))
                tables_ok = True
            except Exception:
                tables_ok = False

        return {
            "status": "healthy" if tables_ok else "degraded",
            "latency_ms": round((time.time() - start) * 1000, 2),
            "tables_ready": tables_ok,
        }
    except Exception as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {
            "status": "unhealthy",
            "latency_ms": round((time.time() - start) * 1000, 2),
            "tables_ready": False,
            "error": str(e),
        }


@router.get("")
async def liveness_check(settings: Settings = Depends(get_settings)):
    return {"status": "healthy", "service": settings.APP_NAME}


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    """
    Readiness check: 503 when the database is unusable.

    Missing Razorpay keys only degrade the payment routes, so they are
    reported but do not fail the check.
    """
    database = await check_database()
    healthy = database["status"] == "healthy"

    response = {
        "status": "ready" if healthy else "not_ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "database": database,
            "payments": {"configured": settings.payments_configured},
        },
    }

    if not healthy:
        logger.warning(f"[HealthCheck] Not ready: {database}")
        return JSONResponse(status_code=503, content=response)
    return response
