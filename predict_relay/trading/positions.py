"""
Position helpers: market details, current price and portfolio totals.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from predict_relay.api.exceptions import PredictError

logger = logging.getLogger(__name__)

RESOLVED_STATUSES = {"RESOLVED", "SETTLED", "CLOSED"}


def to_amount(value: Any) -> float:
    """
    Convert a position amount to a plain number.

    Positions report amounts either as plain numbers or as 18-decimal
    integers; anything longer than 10 digits is taken as the latter.
    """
    if not value:
        return 0.0
    text = str(value)
    try:
        num = float(text)
    except ValueError:
        return 0.0
    if len(text) > 10:
        return num / 1e18
    return num


def is_resolved(market: Dict[str, Any]) -> bool:
    return (
        market.get("status") in RESOLVED_STATUSES
        or market.get("resolved") is True
        or market.get("finalized") is True
    )


def mid_price(book: Optional[Dict[str, Any]]) -> float:
    """
    Mid of the best bid and ask, or whichever side exists, else 0.
    """
    if not book:
        return 0.0
    bids = book.get("bids") or []
    asks = book.get("asks") or []
    best_bid = float(bids[0][0]) if bids else 0.0
    best_ask = float(asks[0][0]) if asks else 0.0
    if best_bid > 0 and best_ask > 0:
        return (best_bid + best_ask) / 2
    return best_bid or best_ask


def position_market_id(position: Dict[str, Any]) -> Optional[Any]:
    return position.get("marketId") or (position.get("market") or {}).get("id")


def enrich_position(
    position: Dict[str, Any],
    market: Optional[Dict[str, Any]] = None,
    book: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Attach market details and the current price to a position.

    Adds ``marketDetails``, ``isResolved``, ``conditionId`` and ``isNegRisk``
    when the market is known, and ``fetchedPrice`` when the book is.
    """
    enriched = dict(position)
    if market:
        enriched["marketDetails"] = market
        enriched["isResolved"] = is_resolved(market)
        enriched["conditionId"] = market.get("conditionId") or position.get("conditionId")
        enriched["isNegRisk"] = bool(market.get("isNegRisk") or market.get("negRisk"))
    if book is not None:
        enriched["fetchedPrice"] = mid_price(book)
    return enriched


def position_value(position: Dict[str, Any]) -> float:
    """Reported value, else shares x fetched price."""
    value = to_amount(position.get("value") or position.get("currentValue"))
    if value == 0:
        shares = to_amount(position.get("shares") or position.get("amount"))
        value = shares * (position.get("fetchedPrice") or 0)
    return value


def total_value(positions: List[Dict[str, Any]]) -> float:
    return sum(position_value(p) for p in positions)


def total_pnl(positions: List[Dict[str, Any]]) -> float:
    return sum(to_amount(p.get("pnl") or p.get("unrealizedPnl")) for p in positions)


def _payload(response: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(response, dict):
        return None
    data = response.get("data")
    return data if isinstance(data, dict) else response


async def load_position_details(client, positions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Enrich positions with their market and orderbook, fetched concurrently.

    A failed lookup is logged and leaves the position without that detail.

    Args:
        client: PredictClient (or anything with ``get_market``/``get_orderbook``)
        positions: Upstream position records
    """

    async def fetch(fetcher, market_id, what):
        try:
            return _payload(await fetcher(market_id))
        except PredictError as e:
            logger.info(f"Could not fetch {what} for market {market_id}: {e}")
            return None

    async def details(position):
        market_id = position_market_id(position)
        if not market_id:
            return dict(position)
        market, book = await asyncio.gather(
            fetch(client.get_market, market_id, "market"),
            fetch(client.get_orderbook, market_id, "orderbook"),
        )
        return enrich_position(position, market, book)

    return list(await asyncio.gather(*(details(p) for p in positions)))
