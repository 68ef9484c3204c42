"""
Dependency injection for API routes.
"""
import time
from typing import Optional

from fastapi import Header

from predict_relay.api.client import PredictClient
from predict_relay.config.settings import Config
from predict_relay.dashboard.api.errors import RelayHTTPError


class AppState:
    """
    Application state container.

    Holds the configuration and the shared upstream client.
    """

    def __init__(self):
        self.config: Optional[Config] = None
        self.client: Optional[PredictClient] = None
        self.start_time: float = 0

    def initialize(self, config: Config):
        """Initialize with configuration."""
        self.config = config
        self.start_time = time.time()
        self.client = PredictClient(
            base_url=config.api_base_url,
            api_key=config.predict_api_key,
            timeout=config.request_timeout,
        )

    async def shutdown(self):
        if self.client is not None:
            await self.client.close()


# Global app state
app_state = AppState()


def get_config() -> Config:
    """Get application configuration."""
    if app_state.config is None:
        app_state.config = Config()
    return app_state.config


def get_client() -> PredictClient:
    """Get the shared upstream client."""
    if app_state.client is None:
        app_state.initialize(get_config())
    return app_state.client


async def require_authorization(authorization: Optional[str] = Header(None)) -> str:
    """
    The caller's Authorization header, forwarded verbatim upstream.

    Raises:
        RelayHTTPError: 401 when the header is missing
    """
    if not authorization:
        raise RelayHTTPError(401, "Authorization required")
    return authorization
