"""
Order list helpers: enrichment with market info and display values.
"""
import math
from typing import Any, Dict, List, Optional

from predict_relay.trading.models import OrderDisplay, Side


def from_wei(value: Any) -> float:
    """
    Convert an amount that may be in wei to a plain number.

    Values above 1e15 are taken as 18-decimal fixed point; smaller values
    are assumed to already be plain numbers.
    """
    if not value:
        return 0.0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0.0
    if num > 1e15:
        return num / 1e18
    return num


def default_outcome_name(outcome_index: Any) -> Optional[str]:
    if outcome_index == 0:
        return "Yes"
    if outcome_index == 1:
        return "No"
    return None


def _outcome_label(outcome: Any) -> Optional[str]:
    if isinstance(outcome, dict):
        return outcome.get("name")
    return outcome


def enrich_order(order: Dict[str, Any], market: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Attach market info to an upstream order record.

    Adds ``market``, ``marketTitle`` and ``outcomeName``. The outcome name is
    the market's outcome at ``outcomeIndex``, else Yes/No for index 0/1.
    """
    outcome_index = order.get("outcomeIndex")
    outcome_name = None
    if market:
        outcomes = market.get("outcomes") or []
        if isinstance(outcome_index, int) and 0 <= outcome_index < len(outcomes):
            outcome_name = _outcome_label(outcomes[outcome_index])

    return {
        **order,
        "market": market,
        "marketTitle": (market.get("question") or market.get("title")) if market else None,
        "outcomeName": outcome_name or default_outcome_name(outcome_index),
    }


def enrich_orders(orders: List[Dict[str, Any]], markets: Dict[Any, Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Enrich every order with the market fetched for its ``marketId``."""
    return [enrich_order(order, markets.get(order.get("marketId"))) for order in orders]


def find_outcome_by_token_id(market: Optional[Dict[str, Any]], token_id: Any) -> Optional[Dict[str, Any]]:
    """Match a token id against the market's outcome ``onChainId``s."""
    if not market or not token_id:
        return None
    for outcome in market.get("outcomes") or []:
        if isinstance(outcome, dict) and outcome.get("onChainId") == token_id:
            return outcome
    return None


def _is_buy(side: Any) -> bool:
    try:
        return Side.parse(side) is Side.BUY
    except ValueError:
        return False


def _finite(value: float) -> float:
    return 0.0 if math.isnan(value) or math.isinf(value) else value


def order_display(wrapper: Dict[str, Any], markets: Optional[List[Dict[str, Any]]] = None) -> OrderDisplay:
    """
    Compute the values shown for an order.

    The display price is derived from the signed amounts: a buy pays
    ``maker`` collateral for ``taker`` shares, a sell gives ``maker`` shares
    for ``taker`` collateral.

    Args:
        wrapper: Upstream (optionally enriched) order record; the signed order
            may be nested under ``order``
        markets: Flat market list used to resolve the title and outcome

    Returns:
        OrderDisplay
    """
    raw = wrapper.get("order") or wrapper
    side = raw.get("side", wrapper.get("side", 0))
    is_buy = _is_buy(side)
    token_id = raw.get("tokenId") or wrapper.get("tokenId")
    market_id = wrapper.get("marketId")
    embedded = wrapper.get("market")

    linked = next(
        (m for m in markets or [] if market_id and (m.get("id") == market_id or m.get("marketId") == market_id)),
        None,
    ) or embedded

    maker = from_wei(raw.get("makerAmount"))
    taker = from_wei(raw.get("takerAmount"))

    price = 0.0
    if maker and taker:
        price = maker / taker if is_buy else taker / maker
    amount = taker if is_buy else maker

    title = None
    for candidate in (linked, embedded):
        if candidate:
            title = candidate.get("question") or candidate.get("title")
            if title:
                break
    if not title:
        title = wrapper.get("marketTitle") or (f"市场 #{market_id}" if market_id else "加载中...")

    outcome = wrapper.get("outcome")
    outcome_name = (
        (outcome.get("name") if isinstance(outcome, dict) else None)
        or wrapper.get("outcomeName")
    )
    if not outcome_name:
        matched = find_outcome_by_token_id(linked, token_id) or find_outcome_by_token_id(embedded, token_id)
        outcome_name = (matched or {}).get("name") or "Unknown"

    return OrderDisplay(
        order_id=wrapper.get("id") or wrapper.get("orderId") or raw.get("hash"),
        market_id=market_id,
        is_buy=is_buy,
        price=_finite(price),
        amount=_finite(amount),
        filled=_finite(from_wei(wrapper.get("amountFilled"))),
        market_title=title,
        outcome_name=outcome_name,
    )
