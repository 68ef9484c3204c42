"""
Orderbook API routes.
"""
from fastapi import APIRouter, Depends

from predict_relay.api.client import PredictClient
from predict_relay.api.exceptions import PredictError
from predict_relay.dashboard.api.dependencies import get_client
from predict_relay.dashboard.api.errors import upstream_error_response

router = APIRouter(prefix="/api/orderbook", tags=["Orderbook"])


@router.get("/{market_id}")
async def get_orderbook(market_id: str, client: PredictClient = Depends(get_client)):
    """
    Get a market's orderbook.

    Levels are quoted for the first outcome; the dashboard derives the other.
    """
    try:
        return await client.get_orderbook(market_id)
    except PredictError as e:
        return upstream_error_response(e, "Failed to fetch orderbook")
