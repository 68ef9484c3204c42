"""
Market list transforms.

The upstream API nests markets inside categories; the dashboard works on a
flat list.
"""
import math
from typing import Any, Dict, Iterable, List, Optional


def flatten_market(category: Dict[str, Any], market: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten one market of a category into the dashboard's record shape."""
    outcomes = market.get("outcomes") or []
    return {
        "id": market.get("id"),
        "conditionId": market.get("conditionId"),
        "question": market.get("question"),
        "title": market.get("title"),
        "imageUrl": market.get("imageUrl"),
        "status": market.get("status"),
        "category": category.get("title"),
        "categorySlug": category.get("slug"),
        "isNegRisk": market.get("isNegRisk"),
        "feeRateBps": market.get("feeRateBps"),
        "outcomes": [o.get("name") for o in outcomes],
        "outcomesDetail": outcomes,
        "createdAt": market.get("createdAt"),
    }


def flatten_markets(categories: Iterable[Dict[str, Any]], limit: int = 0) -> List[Dict[str, Any]]:
    """
    Extract a flat market list from categories.

    Produces one record per (category, market) pair, in upstream order.

    Args:
        categories: Upstream category records with nested ``markets``
        limit: Keep at most this many markets, 0 keeps all

    Returns:
        Flat list of market records
    """
    markets = [
        flatten_market(category, market)
        for category in categories or []
        for market in category.get("markets") or []
    ]
    if limit > 0:
        markets = markets[:limit]
    return markets


def filter_markets(
    markets: List[Dict[str, Any]],
    query: str = "",
    fee_min: Optional[float] = None,
    fee_max: Optional[float] = None,
) -> List[Dict[str, Any]]:
    """
    Search and fee-filter a flat market list, cheapest fee first.

    Args:
        markets: Flat market records
        query: Case-insensitive text matched against question/title and category
        fee_min: Minimum fee in percent (1.0 == 100 bps)
        fee_max: Maximum fee in percent

    Returns:
        Matching markets sorted by ``feeRateBps`` ascending
    """
    result = markets
    q = (query or "").strip().lower()
    if q:
        result = [
            m for m in result
            if q in (m.get("question") or m.get("title") or "").lower()
            or q in (m.get("category") or "").lower()
        ]

    min_bps = fee_min * 100 if fee_min is not None else 0
    max_bps = fee_max * 100 if fee_max is not None else math.inf
    result = [m for m in result if min_bps <= (m.get("feeRateBps") or 0) <= max_bps]

    return sorted(result, key=lambda m: m.get("feeRateBps") or 0)
