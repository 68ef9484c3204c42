"""
Account API routes.
"""
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends

from predict_relay.api.client import PredictClient
from predict_relay.api.exceptions import PredictError
from predict_relay.dashboard.api.dependencies import get_client, require_authorization
from predict_relay.dashboard.api.errors import upstream_error_response

router = APIRouter(prefix="/api/account", tags=["Account"])


@router.get("")
async def get_account(
    authorization: str = Depends(require_authorization),
    client: PredictClient = Depends(get_client),
):
    """Get the user's account."""
    try:
        return await client.get_account(authorization=authorization)
    except PredictError as e:
        return upstream_error_response(e, "Failed to fetch account")


@router.post("/referral")
async def set_referral(
    body: Dict[str, Any] = Body(...),
    authorization: str = Depends(require_authorization),
    client: PredictClient = Depends(get_client),
):
    """Set the user's referral code."""
    try:
        return await client.set_referral(body, authorization=authorization)
    except PredictError as e:
        return upstream_error_response(e, "Failed to set referral")
