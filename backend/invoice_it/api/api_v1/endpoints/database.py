"""
Database health endpoint
"""

from fastapi import APIRouter, HTTPException, status
import logging

from invoice_it.core.database_utils import DatabaseHealthCheck

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def database_health():
    """
    Database health check; 503 when the database cannot be queried
    """
    health_status = DatabaseHealthCheck.check_connection()

    if health_status["status"] == "unhealthy":
        logger.error(f"Database health check failed: {health_status['details']}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=health_status
        )

    return health_status
