"""
Positions API routes.
"""
from fastapi import APIRouter, Depends, Request

from predict_relay.api.client import PredictClient
from predict_relay.api.exceptions import PredictError
from predict_relay.dashboard.api.dependencies import get_client, require_authorization
from predict_relay.dashboard.api.errors import upstream_error_response

router = APIRouter(prefix="/api/positions", tags=["Positions"])


@router.get("")
async def get_positions(
    request: Request,
    authorization: str = Depends(require_authorization),
    client: PredictClient = Depends(get_client),
):
    """Get the user's positions."""
    try:
        return await client.get_positions(dict(request.query_params), authorization=authorization)
    except PredictError as e:
        return upstream_error_response(e, "Failed to fetch positions")
