"""Health check endpoints"""

from fastapi import APIRouter, Depends
from typing import Dict, Any
from datetime import datetime, timezone
import logging

from app.core.config import settings
from app.core.database import check_db
from app.services.context import ServiceContext
from app.utils.dependencies import get_service_context

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }

@router.get("/health/detailed")
async def detailed_health_check(
    context: ServiceContext = Depends(get_service_context)
) -> Dict[str, Any]:
    """Detailed health check with component status"""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {}
    }

    # Check database
    try:
        await check_db()
        health_status["components"]["database"] = {"status": "healthy"}
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        health_status["components"]["database"] = {
            "status": "unhealthy",
            "error": str(e)
        }
        health_status["status"] = "unhealthy"

    # In-process cache is always reachable; report its size
    health_status["components"]["cache"] = {
        "status": "healthy",
        **context.cache.stats()
    }

    return health_status
