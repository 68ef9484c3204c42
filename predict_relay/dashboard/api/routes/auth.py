"""
Authentication API routes.
"""
from fastapi import APIRouter, Depends

from predict_relay.api.client import PredictClient
from predict_relay.api.exceptions import PredictError
from predict_relay.dashboard.api.dependencies import get_client
from predict_relay.dashboard.api.errors import upstream_error_response
from predict_relay.dashboard.api.models import AuthRequest

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.get("/message")
async def get_auth_message(client: PredictClient = Depends(get_client)):
    """Get the message the wallet signs to authenticate."""
    try:
        return await client.get_auth_message()
    except PredictError as e:
        return upstream_error_response(e, "Failed to fetch auth message")


@router.post("")
async def authenticate(body: AuthRequest, client: PredictClient = Depends(get_client)):
    """Exchange a signed auth message for a JWT."""
    try:
        return await client.authenticate(body.signer, body.signature, body.message)
    except PredictError as e:
        return upstream_error_response(e, "Authentication failed")
