"""
Orderbook display helpers.

Upstream books are quoted for the first ("Yes") outcome as ``[price, quantity]``
levels. The "No" view is derived from it: a Yes bid at p is a No ask at 1 - p.
"""
from typing import Any, Dict, List, Optional, Tuple

from predict_relay.trading.models import Outcome

Level = List[float]


def _levels(raw: Optional[List[Any]]) -> List[Level]:
    return [[float(price), float(qty)] for price, qty in raw or []]


def invert_levels(levels: List[Level]) -> List[Level]:
    """Map levels to the complementary outcome's prices."""
    return [[1 - price, qty] for price, qty in levels]


def display_orderbook(book: Optional[Dict[str, Any]], outcome: Outcome = Outcome.YES) -> Dict[str, List[Level]]:
    """
    Build the bid/ask ladders shown for an outcome.

    For the No outcome upstream bids become asks and upstream asks become
    bids, each at ``1 - price``. Both sides are sorted by price, highest first.

    Args:
        book: Upstream orderbook ``{"bids": [...], "asks": [...]}``
        outcome: Outcome being viewed

    Returns:
        ``{"asks": [...], "bids": [...]}``
    """
    if not book:
        return {"asks": [], "bids": []}

    bids = _levels(book.get("bids"))
    asks = _levels(book.get("asks"))

    if Outcome(outcome) is Outcome.NO:
        asks, bids = invert_levels(bids), invert_levels(asks)

    asks.sort(key=lambda level: level[0], reverse=True)
    bids.sort(key=lambda level: level[0], reverse=True)
    return {"asks": asks, "bids": bids}


def best_prices(book: Optional[Dict[str, Any]], outcome_index: int = 0) -> Tuple[Optional[float], Optional[float]]:
    """
    Best bid and ask for an outcome, taken from the top of the upstream book.

    Returns:
        ``(best_bid, best_ask)``, ``None`` for an empty side
    """
    if not book:
        return None, None

    bids = _levels(book.get("bids"))
    asks = _levels(book.get("asks"))

    if outcome_index == 0:
        return (
            bids[0][0] if bids else None,
            asks[0][0] if asks else None,
        )
    return (
        1 - asks[0][0] if asks else None,
        1 - bids[0][0] if bids else None,
    )
