"""
Categories API routes.
"""
from fastapi import APIRouter, Depends, Request

from predict_relay.api.client import PredictClient
from predict_relay.api.exceptions import PredictError
from predict_relay.dashboard.api.dependencies import get_client
from predict_relay.dashboard.api.errors import upstream_error_response

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("")
async def get_categories(request: Request, client: PredictClient = Depends(get_client)):
    """Get categories in the upstream's nested format; query forwarded as is."""
    try:
        return await client.get_categories(dict(request.query_params))
    except PredictError as e:
        return upstream_error_response(e, "Failed to fetch categories")


@router.get("/{slug}")
async def get_category(slug: str, client: PredictClient = Depends(get_client)):
    """Get a single category."""
    try:
        return await client.get_category(slug)
    except PredictError as e:
        return upstream_error_response(e, "Failed to fetch category")
