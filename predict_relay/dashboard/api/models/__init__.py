from .requests import AuthRequest, RemoveOrdersRequest
from .responses import MarketsResponse, HealthResponse, ErrorResponse

__all__ = [
    "AuthRequest",
    "RemoveOrdersRequest",
    "MarketsResponse",
    "HealthResponse",
    "ErrorResponse",
]
