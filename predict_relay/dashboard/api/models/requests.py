"""
Request models for the relay API.
"""
from pydantic import BaseModel
from typing import Any, Optional


class AuthRequest(BaseModel):
    """Signed auth message exchanged for a JWT."""
    signer: Optional[str] = None
    signature: Optional[str] = None
    message: Optional[str] = None


class RemoveOrdersRequest(BaseModel):
    """
    Orders to remove from the orderbook.

    ``ids`` is checked by the route so a malformed value gets the relay's
    400 envelope rather than a validation error.
    """
    ids: Optional[Any] = None
