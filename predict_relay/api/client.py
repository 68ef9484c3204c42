"""
Prediction-market REST API Client.

Provides an async aiohttp wrapper around the upstream REST API used by the
relay. The client attaches the platform API key to every request and forwards
the browser's bearer token on endpoints that act on a user's account.
"""

import asyncio
import logging
import time
from typing import Any, Dict, Iterable, List, Optional, Type

import aiohttp

from predict_relay.api.exceptions import (
    PredictError,
    PredictAPIError,
    RateLimitError,
    AuthenticationError,
    NotFoundError,
    OrderError,
)
from predict_relay.api.utils import clean_params, parse_body, extract_error_message

logger = logging.getLogger(__name__)


class PredictClient:
    """
    Asynchronous client for the prediction-market REST API.

    Attributes:
        base_url: API base URL
        api_key: Platform API key sent as ``x-api-key``
        timeout: Total request timeout in seconds

    Example:
        async with PredictClient(api_key="...") as client:
            categories = await client.get_categories({"status": "OPEN"})
            book = await client.get_orderbook("1234")
    """

    DEFAULT_BASE_URL = "https://api-testnet.predict.fun"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
    ):
        """
        Initialize the client.

        Args:
            base_url: Upstream API base URL
            api_key: Platform API key, optional for public endpoints
            timeout: Total request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

        self._session: Optional[aiohttp.ClientSession] = None
        self._request_count = 0
        self._last_request_time: Optional[float] = None

        if not api_key:
            logger.warning("PREDICT_API_KEY not set, upstream calls are unauthenticated")

    @property
    def default_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def connect(self) -> None:
        """Create the HTTP session if it is not open yet."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(
                timeout=timeout,
                headers=self.default_headers,
            )
            logger.info(f"PredictClient connected to {self.base_url}")

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        logger.info(f"PredictClient closed after {self._request_count} requests")

    async def __aenter__(self) -> "PredictClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # =========================================================================
    # Internal Request Methods
    # =========================================================================

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        if self._session is None or self._session.closed:
            await self.connect()
        return self._session

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        data: Optional[Any] = None,
        authorization: Optional[str] = None,
        error_cls: Type[PredictAPIError] = PredictAPIError,
    ) -> Any:
        """
        Make an HTTP request to the upstream API.

        Args:
            method: HTTP method (GET, POST, ...)
            endpoint: API endpoint path, e.g. ``/v1/orders``
            params: Query parameters, unset values are dropped
            data: JSON body
            authorization: Browser ``Authorization`` header, forwarded verbatim
            error_cls: Exception raised for generic 4xx/5xx answers

        Returns:
            Parsed JSON response

        Raises:
            RateLimitError: When rate limited
            AuthenticationError: For 401/403 answers
            NotFoundError: For 404 answers
            PredictAPIError: For any other error status
            PredictError: For network failures and timeouts
        """
        session = await self._get_session()
        url = f"{self.base_url}{endpoint}"

        headers = {}
        if authorization:
            headers["Authorization"] = authorization

        self._request_count += 1
        self._last_request_time = time.time()

        logger.debug(f"Request {self._request_count}: {method} {url}")

        try:
            async with session.request(
                method,
                url,
                params=clean_params(params),
                json=data,
                headers=headers,
            ) as response:
                response_text = await response.text()
                body = parse_body(response_text)

                logger.debug(
                    f"Response {response.status}: {response_text[:200]}..."
                    if len(response_text) > 200 else
                    f"Response {response.status}: {response_text}"
                )

                if response.status == 429:
                    retry_after = response.headers.get("Retry-After")
                    try:
                        retry_after_seconds = float(retry_after) if retry_after else None
                    except ValueError:
                        retry_after_seconds = None
                    raise RateLimitError(
                        429,
                        extract_error_message(body, "Rate limit exceeded"),
                        response_data=body,
                        retry_after=retry_after_seconds,
                    )

                if response.status in (401, 403):
                    raise AuthenticationError(
                        response.status,
                        extract_error_message(body, "Unauthorized"),
                        response_data=body,
                    )

                if response.status == 404:
                    raise NotFoundError(
                        404,
                        extract_error_message(body, f"Resource not found: {endpoint}"),
                        response_data=body,
                    )

                if response.status >= 400:
                    raise error_cls(
                        response.status,
                        extract_error_message(body, f"Request failed with status {response.status}"),
                        response_data=body,
                    )

                return body

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Network error during {method} {url}: {e!r}")
            raise PredictError(f"Network error: {e}") from e

    # =========================================================================
    # Categories & Markets
    # =========================================================================

    async def get_categories(self, params: Optional[dict] = None) -> dict:
        """
        List categories with their nested markets.

        Args:
            params: Query parameters (``first``, ``after``, ``status`` ...)
        """
        return await self._request("GET", "/v1/categories", params=params)

    async def get_category(self, slug: str) -> dict:
        """Fetch a single category by slug."""
        return await self._request("GET", f"/v1/categories/{slug}")

    async def get_market(self, market_id: str) -> dict:
        """Fetch market details by id."""
        return await self._request("GET", f"/v1/markets/{market_id}")

    async def get_orderbook(self, market_id: str) -> dict:
        """
        Fetch the orderbook of a market.

        Levels are ``[price, quantity]`` pairs for the first ("Yes") outcome.
        """
        return await self._request("GET", f"/v1/markets/{market_id}/orderbook")

    async def get_markets_by_ids(self, market_ids: Iterable[Any]) -> Dict[Any, dict]:
        """
        Fetch several markets concurrently.

        Ids are deduplicated and falsy ids skipped. A failed lookup is logged
        and left out of the result; it never fails the batch.

        Args:
            market_ids: Market ids, duplicates allowed

        Returns:
            Mapping of market id to the market's ``data`` payload
        """
        unique_ids = list(dict.fromkeys(m for m in market_ids if m))
        if not unique_ids:
            return {}

        async def fetch(market_id):
            try:
                response = await self.get_market(market_id)
            except PredictError as e:
                logger.info(f"Failed to fetch market {market_id}: {e}")
                return market_id, None
            if isinstance(response, dict) and response.get("success") and response.get("data"):
                return market_id, response["data"]
            return market_id, None

        results = await asyncio.gather(*(fetch(m) for m in unique_ids))
        return {market_id: data for market_id, data in results if data is not None}

    # =========================================================================
    # Orders
    # =========================================================================

    async def get_orders(self, params: Optional[dict] = None, authorization: Optional[str] = None) -> dict:
        """List the authenticated user's orders."""
        return await self._request(
            "GET", "/v1/orders", params=params, authorization=authorization
        )

    async def create_order(self, body: dict, authorization: Optional[str] = None) -> dict:
        """
        Submit a signed order.

        Args:
            body: Submission payload ``{"data": {"pricePerShare", "strategy", "order"}}``
            authorization: Bearer JWT of the user
        """
        return await self._request(
            "POST", "/v1/orders", data=body, authorization=authorization, error_cls=OrderError
        )

    async def remove_orders(self, ids: List[str], authorization: Optional[str] = None) -> dict:
        """Remove open orders from the orderbook by id."""
        return await self._request(
            "POST",
            "/v1/orders/remove",
            data={"data": {"ids": [str(i) for i in ids]}},
            authorization=authorization,
            error_cls=OrderError,
        )

    # =========================================================================
    # Account & Positions
    # =========================================================================

    async def get_positions(self, params: Optional[dict] = None, authorization: Optional[str] = None) -> dict:
        """List the authenticated user's positions."""
        return await self._request(
            "GET", "/v1/positions", params=params, authorization=authorization
        )

    async def get_account(self, authorization: Optional[str] = None) -> dict:
        """Fetch the authenticated user's account."""
        return await self._request("GET", "/v1/account", authorization=authorization)

    async def set_referral(self, body: dict, authorization: Optional[str] = None) -> dict:
        """Set the referral code of the authenticated user."""
        return await self._request(
            "POST", "/v1/account/referral", data=body, authorization=authorization
        )

    # =========================================================================
    # Authentication
    # =========================================================================

    async def get_auth_message(self) -> dict:
        """Fetch the message a wallet must sign to obtain a JWT."""
        return await self._request("GET", "/v1/auth/message")

    async def authenticate(self, signer: str, signature: str, message: str) -> dict:
        """
        Exchange a signed auth message for a JWT.

        Args:
            signer: Wallet address
            signature: Signature of ``message``
            message: The message returned by :meth:`get_auth_message`
        """
        return await self._request(
            "POST",
            "/v1/auth",
            data={"signer": signer, "signature": signature, "message": message},
        )

    def get_stats(self) -> dict:
        """Get client statistics."""
        return {
            "base_url": self.base_url,
            "total_requests": self._request_count,
            "last_request_time": self._last_request_time,
            "configured": bool(self.api_key),
        }
