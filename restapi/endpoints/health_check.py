"""Health check endpoint for monitoring application status."""

from fastapi import APIRouter, Depends

from components.core import schemas
from components.core.config import Settings
from components.core.init_db import get_app_settings

router = APIRouter(
    prefix="/health_check",
    tags=["services"],
    responses={200: {"description": "Service is healthy"}},
)


@router.get("/", response_model=schemas.HealthCheck)
async def health_check(settings: Settings = Depends(get_app_settings)) -> schemas.HealthCheck:
    """Check the health status of the service."""
    return schemas.HealthCheck(
        service_name=settings.APP_NAME,
        status="healthy"
    )
