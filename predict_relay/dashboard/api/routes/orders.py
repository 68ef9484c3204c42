"""
Orders API routes.
"""
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, Request

from predict_relay.api.client import PredictClient
from predict_relay.api.exceptions import PredictAPIError, PredictError
from predict_relay.dashboard.api.dependencies import get_client, require_authorization
from predict_relay.dashboard.api.errors import RelayHTTPError, upstream_error_response
from predict_relay.dashboard.api.models import RemoveOrdersRequest
from predict_relay.logging import logger
from predict_relay.trading.orders import enrich_orders

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.get("")
async def get_orders(
    request: Request,
    authorization: str = Depends(require_authorization),
    client: PredictClient = Depends(get_client),
):
    """
    Get the user's orders, each enriched with its market.

    Market lookups run concurrently; a failed lookup leaves ``market`` null.
    """
    try:
        orders = await client.get_orders(dict(request.query_params), authorization=authorization)
    except PredictError as e:
        return upstream_error_response(e, "Failed to fetch orders")

    if isinstance(orders, dict) and orders.get("success") and isinstance(orders.get("data"), list):
        markets = await client.get_markets_by_ids(o.get("marketId") for o in orders["data"])
        orders["data"] = enrich_orders(orders["data"], markets)

    return orders


@router.post("")
async def create_order(
    body: Dict[str, Any] = Body(...),
    authorization: str = Depends(require_authorization),
    client: PredictClient = Depends(get_client),
):
    """Submit a signed order; the body is forwarded unchanged."""
    try:
        return await client.create_order(body, authorization=authorization)
    except PredictError as e:
        api_error = None
        if isinstance(e, PredictAPIError) and isinstance(e.response_data, dict):
            api_error = e.response_data.get("error")
        return upstream_error_response(e, "Failed to submit order", error=api_error)


@router.post("/remove")
async def remove_orders(
    body: RemoveOrdersRequest,
    authorization: str = Depends(require_authorization),
    client: PredictClient = Depends(get_client),
):
    """Remove orders from the orderbook by id."""
    if not isinstance(body.ids, list) or not body.ids:
        raise RelayHTTPError(400, "ids array is required")

    logger.info("Removing orders from orderbook", ids=body.ids)

    try:
        response = await client.remove_orders(body.ids, authorization=authorization)
    except PredictError as e:
        return upstream_error_response(e, "Failed to remove orders", include_details=True)

    logger.info("Remove orders success", ids=body.ids)
    return response
