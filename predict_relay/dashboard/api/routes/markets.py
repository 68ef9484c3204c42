"""
Markets API routes.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query

from predict_relay.api.client import PredictClient
from predict_relay.api.exceptions import PredictError
from predict_relay.dashboard.api.dependencies import get_client
from predict_relay.dashboard.api.errors import upstream_error_response
from predict_relay.dashboard.api.models import ErrorResponse, MarketsResponse
from predict_relay.logging import logger
from predict_relay.trading.markets import filter_markets, flatten_markets

router = APIRouter(prefix="/api/markets", tags=["Markets"])


@router.get("", response_model=MarketsResponse, responses={500: {"model": ErrorResponse}})
async def get_markets(
    first: int = Query(100, description="Number of categories to fetch"),
    after: Optional[str] = Query(None, description="Pagination cursor"),
    status: str = Query("OPEN", description="Market status"),
    limit: int = Query(0, description="Max markets returned, 0 = no limit"),
    search: Optional[str] = Query(None, description="Filter by question, title or category"),
    fee_min: Optional[float] = Query(None, description="Minimum fee in percent"),
    fee_max: Optional[float] = Query(None, description="Maximum fee in percent"),
    client: PredictClient = Depends(get_client),
):
    """
    Get a flat market list extracted from the categories endpoint.

    - **first**: categories per page
    - **limit**: truncate the flattened list
    - **search**, **fee_min**, **fee_max**: optional filters, results then sorted by fee
    """
    try:
        response = await client.get_categories({"first": first, "after": after, "status": status})
    except PredictError as e:
        return upstream_error_response(e, "Failed to fetch markets")

    categories = (response or {}).get("data") or []
    markets = flatten_markets(categories)

    if search or fee_min is not None or fee_max is not None:
        markets = filter_markets(markets, search or "", fee_min, fee_max)

    if limit > 0:
        markets = markets[:limit]

    logger.info(f"Returning {len(markets)} markets from {len(categories)} categories")

    return MarketsResponse(
        success=True,
        data=markets,
        cursor=(response or {}).get("cursor"),
        total=len(markets),
    )


@router.get("/{market_id}")
async def get_market(market_id: str, client: PredictClient = Depends(get_client)):
    """Get a single market."""
    try:
        return await client.get_market(market_id)
    except PredictError as e:
        return upstream_error_response(e, "Failed to fetch market")
