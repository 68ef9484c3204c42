"""
Tests for order enrichment and display values.
"""
import pytest

from predict_relay.trading.orders import (
    default_outcome_name,
    enrich_order,
    enrich_orders,
    find_outcome_by_token_id,
    from_wei,
    order_display,
)

WEI = 10 ** 18

MARKET = {
    "id": 7,
    "question": "Will it rain tomorrow?",
    "outcomes": [{"name": "Rain", "onChainId": "111"}, {"name": "Dry", "onChainId": "222"}],
}


# ============================================================================
# from_wei
# ============================================================================

class TestFromWei:

    def test_wei_values_scaled(self):
        assert from_wei(str(5 * WEI)) == pytest.approx(5.0)
        assert from_wei(25 * WEI // 100) == pytest.approx(0.25)

    def test_small_values_unchanged(self):
        assert from_wei(12.5) == 12.5
        assert from_wei("3") == 3.0

    @pytest.mark.parametrize("value", [None, "", 0, "abc"])
    def test_empty_is_zero(self, value):
        assert from_wei(value) == 0.0


# ============================================================================
# Enrichment
# ============================================================================

class TestEnrichOrder:

    def test_with_market(self):
        order = enrich_order({"id": "o1", "marketId": 7, "outcomeIndex": 1}, MARKET)
        assert order["id"] == "o1"
        assert order["market"] is MARKET
        assert order["marketTitle"] == "Will it rain tomorrow?"
        assert order["outcomeName"] == "Dry"

    def test_title_fallback(self):
        order = enrich_order({"outcomeIndex": 0}, {"title": "Short title"})
        assert order["marketTitle"] == "Short title"

    def test_string_outcomes(self):
        order = enrich_order({"outcomeIndex": 0}, {"outcomes": ["Up", "Down"]})
        assert order["outcomeName"] == "Up"

    def test_without_market(self):
        order = enrich_order({"outcomeIndex": 1}, None)
        assert order["market"] is None
        assert order["marketTitle"] is None
        assert order["outcomeName"] == "No"

    def test_default_outcome_names(self):
        assert default_outcome_name(0) == "Yes"
        assert default_outcome_name(1) == "No"
        assert default_outcome_name(2) is None
        assert default_outcome_name(None) is None

    def test_enrich_orders(self):
        orders = enrich_orders(
            [{"marketId": 7, "outcomeIndex": 0}, {"marketId": 8, "outcomeIndex": 0}],
            {7: MARKET},
        )
        assert orders[0]["outcomeName"] == "Rain"
        assert orders[1]["market"] is None
        assert orders[1]["outcomeName"] == "Yes"

    def test_find_outcome_by_token_id(self):
        assert find_outcome_by_token_id(MARKET, "222")["name"] == "Dry"
        assert find_outcome_by_token_id(MARKET, "999") is None
        assert find_outcome_by_token_id(None, "222") is None


# ============================================================================
# Display values
# ============================================================================

class TestOrderDisplay:

    def test_buy_price_and_amount(self):
        wrapper = {
            "id": "o1",
            "marketId": 7,
            "amountFilled": str(2 * WEI),
            "order": {
                "side": 0,
                "tokenId": "111",
                "makerAmount": str(4 * WEI),   # 4 collateral
                "takerAmount": str(10 * WEI),  # for 10 shares
            },
        }
        display = order_display(wrapper, [MARKET])
        assert display.is_buy is True
        assert display.price == pytest.approx(0.4)
        assert display.amount == pytest.approx(10)
        assert display.filled == pytest.approx(2)
        assert display.market_title == "Will it rain tomorrow?"
        assert display.outcome_name == "Rain"
        assert display.order_id == "o1"

    def test_sell_price_and_amount(self):
        wrapper = {
            "marketId": 7,
            "order": {
                "side": 1,
                "tokenId": "222",
                "makerAmount": str(10 * WEI),  # 10 shares
                "takerAmount": str(6 * WEI),   # for 6 collateral
                "hash": "0xhash",
            },
        }
        display = order_display(wrapper, [MARKET])
        assert display.is_buy is False
        assert display.price == pytest.approx(0.6)
        assert display.amount == pytest.approx(10)
        assert display.outcome_name == "Dry"
        assert display.order_id == "0xhash"

    def test_zero_amounts_give_zero_price(self):
        display = order_display({"order": {"side": 0, "makerAmount": "0", "takerAmount": str(WEI)}})
        assert display.price == 0.0

    def test_enriched_fields_are_used(self):
        wrapper = {"marketId": 99, "marketTitle": "From relay", "outcomeName": "Yes", "order": {"side": "SELL"}}
        display = order_display(wrapper)
        assert display.market_title == "From relay"
        assert display.outcome_name == "Yes"
        assert display.is_buy is False

    def test_embedded_market(self):
        wrapper = {"marketId": 7, "market": MARKET, "order": {"side": 0, "tokenId": "222"}}
        display = order_display(wrapper)
        assert display.market_title == "Will it rain tomorrow?"
        assert display.outcome_name == "Dry"

    def test_title_placeholders(self):
        assert order_display({"marketId": 5, "order": {}}).market_title == "市场 #5"
        assert order_display({"order": {}}).market_title == "加载中..."

    def test_unknown_outcome(self):
        assert order_display({"order": {"tokenId": "333"}}, [MARKET]).outcome_name == "Unknown"
