import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlmodel import text

from asset_allocation.api.deps import SessionDep
from asset_allocation.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthCheckResponse(BaseModel):
    status: str
    database: str
    version: str
    error: str | None = None


@router.get("/health", response_model=HealthCheckResponse)
def health_check(db: SessionDep):
    """Report whether the database answers a trivial query."""
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        body = HealthCheckResponse(
            status="unhealthy",
            database="disconnected",
            version=settings.VERSION,
            error=str(e),
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body.model_dump()
        )
    return HealthCheckResponse(
        status="healthy", database="connected", version=settings.VERSION
    )
