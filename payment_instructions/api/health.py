from fastapi import APIRouter
import time

from ..config import settings
from .schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint for container orchestration.

    The service holds no connections, so liveness is all there is to report.
    """
    return HealthResponse(
        status="healthy",
        service=settings.service_name,
        timestamp=time.time(),
    )
