"""
Fixed-point order amounts.

Prices and quantities are scaled to 18-decimal integers ("wei") before they
reach a signed order. Decimal arithmetic keeps the scaling exact.
"""
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Any, Dict, Optional, Union

from predict_relay.api.exceptions import ValidationError
from predict_relay.trading.models import OrderAmounts, Side, Strategy

DECIMALS = 18
WEI = 10 ** DECIMALS

PRICE_PRECISION = Decimal("0.01")

# Limit prices used to sweep the book for market orders
MARKET_BUY_PRICE = Decimal("0.99")
MARKET_SELL_PRICE = Decimal("0.01")

DEFAULT_FEE_RATE_BPS = 100

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number, field: str = "value") -> Decimal:
    try:
        result = Decimal(str(value))
    except ArithmeticError:
        raise ValidationError(field, f"not a number: {value!r}") from None
    if not result.is_finite():
        raise ValidationError(field, f"not a number: {value!r}")
    return result


def to_wei(value: Number, decimals: int = DECIMALS) -> int:
    """Scale a decimal amount to an integer with ``decimals`` places, truncating."""
    scaled = to_decimal(value) * (Decimal(10) ** decimals)
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def wei_to_decimal(amount: int, decimals: int = DECIMALS) -> Decimal:
    return Decimal(int(amount)) / (Decimal(10) ** decimals)


def format_wei(amount: int, places: int = 2, decimals: int = DECIMALS) -> str:
    """Format a wei amount for display, e.g. ``format_wei(1500000000000000000) == "1.50"``."""
    quantum = Decimal(1).scaleb(-places)
    return str(wei_to_decimal(amount, decimals).quantize(quantum, rounding=ROUND_DOWN))


def normalize_price(price: Number) -> Decimal:
    """
    Round a limit price to 2 decimals and check it lies strictly in (0, 1).

    Raises:
        ValidationError: If the price is out of range
    """
    value = to_decimal(price, "price").quantize(PRICE_PRECISION, rounding=ROUND_HALF_UP)
    if not Decimal(0) < value < Decimal(1):
        raise ValidationError("price", "价格必须在 0 到 1 之间")
    return value


def normalize_quantity(quantity: Number) -> Decimal:
    """
    Raises:
        ValidationError: If the quantity is not positive
    """
    value = to_decimal(quantity, "quantity")
    if value <= 0:
        raise ValidationError("quantity", "请输入有效数量")
    return value


def limit_order_amounts(side: Side, price_per_share_wei: int, quantity_wei: int) -> OrderAmounts:
    """
    Maker/taker amounts of a limit order.

    A buy offers collateral (price x quantity) and takes shares; a sell
    offers shares and takes collateral.

    Args:
        side: BUY or SELL
        price_per_share_wei: Price scaled to 18 decimals
        quantity_wei: Share quantity scaled to 18 decimals

    Returns:
        OrderAmounts
    """
    collateral = price_per_share_wei * quantity_wei // WEI
    if Side(side) is Side.BUY:
        maker, taker = collateral, quantity_wei
    else:
        maker, taker = quantity_wei, collateral
    return OrderAmounts(
        price_per_share=price_per_share_wei,
        maker_amount=maker,
        taker_amount=taker,
    )


def market_order_amounts(side: Side, quantity_wei: int) -> OrderAmounts:
    """Amounts of a market order: a limit order priced to cross the whole book."""
    price = MARKET_BUY_PRICE if Side(side) is Side.BUY else MARKET_SELL_PRICE
    return limit_order_amounts(side, to_wei(price), quantity_wei)


def order_amounts(side: Side, strategy: Strategy, quantity: Number, price: Optional[Number] = None) -> OrderAmounts:
    """
    Validate user input and compute the amounts for either strategy.

    Raises:
        ValidationError: For a non-positive quantity or an invalid limit price
    """
    quantity_wei = to_wei(normalize_quantity(quantity))
    if Strategy(strategy) is Strategy.LIMIT:
        if price is None:
            raise ValidationError("price", "价格必须在 0 到 1 之间")
        return limit_order_amounts(side, to_wei(normalize_price(price)), quantity_wei)
    return market_order_amounts(side, quantity_wei)


def build_order_args(
    maker: str,
    side: Side,
    token_id: Any,
    amounts: OrderAmounts,
    fee_rate_bps: int = DEFAULT_FEE_RATE_BPS,
    nonce: int = 0,
) -> Dict[str, Any]:
    """
    Unsigned order fields handed to the signer.

    The maker signs for itself; no separate signer address is used.
    """
    return {
        "maker": maker,
        "signer": maker,
        "side": int(side),
        "tokenId": str(token_id),
        "makerAmount": amounts.maker_amount,
        "takerAmount": amounts.taker_amount,
        "nonce": nonce,
        "feeRateBps": fee_rate_bps or DEFAULT_FEE_RATE_BPS,
    }
