"""
Uniform error envelopes of the relay.
"""
from typing import Any, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from predict_relay.api.exceptions import PredictAPIError, PredictError
from predict_relay.logging import logger


class RelayHTTPError(Exception):
    """Error raised by the relay itself, before anything is sent upstream."""

    def __init__(self, status_code: int, error: str):
        self.status_code = status_code
        self.error = error
        super().__init__(error)


async def relay_http_error_handler(request: Request, exc: RelayHTTPError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.error},
    )


def upstream_error_response(
    exc: PredictError,
    label: str,
    error: Optional[Any] = None,
    include_details: bool = False,
) -> JSONResponse:
    """
    Answer a failed upstream call.

    The upstream status is propagated; transport failures become 500.

    Args:
        exc: The raised client error
        label: Route-specific error text, e.g. "Failed to fetch markets"
        error: Overrides ``label`` as the ``error`` field
        include_details: Add the raw upstream body as ``details``
    """
    if isinstance(exc, PredictAPIError):
        status = exc.status
        message = exc.message
        details = exc.response_data
    else:
        status = 500
        message = str(exc)
        details = None

    logger.error(f"{label}", status=status, error=message)

    content = {
        "success": False,
        "error": error or label,
        "message": message,
    }
    if include_details:
        content["details"] = details
    return JSONResponse(status_code=status, content=content)
