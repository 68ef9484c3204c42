"""
Prediction-market API Client Package.

This package provides the async client the relay uses to talk to the
upstream REST API, plus its exception hierarchy.

Example:
    from predict_relay.api import PredictClient

    async with PredictClient(api_key="...") as client:
        categories = await client.get_categories()
        orderbook = await client.get_orderbook(market_id)
"""

from predict_relay.api.client import PredictClient
from predict_relay.api.exceptions import (
    PredictError,
    PredictAPIError,
    RateLimitError,
    AuthenticationError,
    NotFoundError,
    OrderError,
    ValidationError,
    ConfigurationError,
    ApprovalError,
)
from predict_relay.api.utils import (
    clean_params,
    parse_body,
    extract_error_message,
)

__all__ = [
    # Client
    "PredictClient",
    # Exceptions
    "PredictError",
    "PredictAPIError",
    "RateLimitError",
    "AuthenticationError",
    "NotFoundError",
    "OrderError",
    "ValidationError",
    "ConfigurationError",
    "ApprovalError",
    # Utilities
    "clean_params",
    "parse_body",
    "extract_error_message",
]
