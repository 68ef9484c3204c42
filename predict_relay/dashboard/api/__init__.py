"""
Relay API module.
"""
from .main import app
from .dependencies import app_state, get_config, get_client, require_authorization

__all__ = [
    "app",
    "app_state",
    "get_config",
    "get_client",
    "require_authorization",
]
