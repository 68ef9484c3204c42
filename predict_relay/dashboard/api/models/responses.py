"""
Response models for the relay API.
"""
from pydantic import BaseModel
from typing import Optional, List, Dict, Any


class MarketsResponse(BaseModel):
    """Flattened market list."""
    success: bool = True
    data: List[Dict[str, Any]] = []
    cursor: Optional[Any] = None
    total: int = 0


class HealthResponse(BaseModel):
    """Health check response."""
    success: bool = True
    configured: bool
    version: str


class ErrorResponse(BaseModel):
    """Failure envelope."""
    success: bool = False
    error: Any
    message: Optional[str] = None
    details: Optional[Any] = None
