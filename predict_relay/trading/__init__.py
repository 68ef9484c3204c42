"""
Trading helpers of the dashboard.

Pure transforms (markets, orderbook, orders, amounts, error translation)
and the approval + order-construction workflow.
"""

from predict_relay.trading.models import (
    Side,
    Strategy,
    Outcome,
    ApprovalKind,
    ContractAddresses,
    OrderAmounts,
    TradeRequest,
    ApprovalRequirement,
    ApprovalStatus,
    OrderDisplay,
)
from predict_relay.trading.markets import flatten_markets, filter_markets
from predict_relay.trading.orderbook import display_orderbook, best_prices
from predict_relay.trading.orders import enrich_orders, order_display, from_wei
from predict_relay.trading.positions import enrich_position, load_position_details, total_value, total_pnl
from predict_relay.trading.amounts import (
    to_wei,
    format_wei,
    limit_order_amounts,
    market_order_amounts,
    order_amounts,
    build_order_args,
)
from predict_relay.trading.errors import translate_error
from predict_relay.trading.approvals import (
    required_approval,
    execute_approval,
    approval_status,
    grant_approval,
    revoke_approval,
    approve_all,
    Web3Gateway,
)
from predict_relay.trading.workflow import OrderWorkflow, build_submission

__all__ = [
    # Models
    "Side",
    "Strategy",
    "Outcome",
    "ApprovalKind",
    "ContractAddresses",
    "OrderAmounts",
    "TradeRequest",
    "ApprovalRequirement",
    "ApprovalStatus",
    "OrderDisplay",
    # Transforms
    "flatten_markets",
    "filter_markets",
    "display_orderbook",
    "best_prices",
    "enrich_orders",
    "order_display",
    "from_wei",
    "enrich_position",
    "load_position_details",
    "total_value",
    "total_pnl",
    "translate_error",
    # Amounts
    "to_wei",
    "format_wei",
    "limit_order_amounts",
    "market_order_amounts",
    "order_amounts",
    "build_order_args",
    # Approvals & workflow
    "required_approval",
    "execute_approval",
    "approval_status",
    "grant_approval",
    "revoke_approval",
    "approve_all",
    "Web3Gateway",
    "OrderWorkflow",
    "build_submission",
]
