"""
System API routes.
"""
from fastapi import APIRouter, Depends

from predict_relay import __version__
from predict_relay.config.settings import Config
from predict_relay.dashboard.api.models import HealthResponse
from predict_relay.dashboard.api.dependencies import get_config

router = APIRouter(prefix="/api", tags=["System"])


@router.get("/health", response_model=HealthResponse)
async def health_check(config: Config = Depends(get_config)) -> HealthResponse:
    """
    Health check. Reports whether an API key is configured, never the key.
    """
    return HealthResponse(
        success=True,
        configured=config.is_configured,
        version=__version__,
    )
