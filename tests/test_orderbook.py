"""
Tests for orderbook display and best price derivation.
"""
import pytest

from predict_relay.trading.models import Outcome
from predict_relay.trading.orderbook import best_prices, display_orderbook, invert_levels


BOOK = {
    "bids": [[0.45, 100], [0.40, 50]],
    "asks": [[0.55, 80], [0.60, 20]],
}


class TestDisplayOrderbook:
    """Test Yes/No ladder construction."""

    def test_yes_keeps_sides(self):
        view = display_orderbook(BOOK, Outcome.YES)
        assert view["bids"] == [[0.45, 100], [0.40, 50]]
        assert view["asks"] == [[0.60, 20], [0.55, 80]]

    def test_no_swaps_and_inverts(self):
        view = display_orderbook(BOOK, Outcome.NO)

        ask_prices = [price for price, _ in view["asks"]]
        bid_prices = [price for price, _ in view["bids"]]
        assert ask_prices == pytest.approx([0.60, 0.55])
        assert bid_prices == pytest.approx([0.45, 0.40])
        assert [qty for _, qty in view["asks"]] == [50, 100]
        assert [qty for _, qty in view["bids"]] == [80, 20]

    def test_outcome_from_string(self):
        assert display_orderbook(BOOK, "no") == display_orderbook(BOOK, Outcome.NO)

    def test_sides_sorted_descending(self):
        book = {"bids": [[0.1, 1], [0.3, 1], [0.2, 1]], "asks": [[0.7, 1], [0.9, 1], [0.8, 1]]}
        view = display_orderbook(book)
        assert [p for p, _ in view["bids"]] == [0.3, 0.2, 0.1]
        assert [p for p, _ in view["asks"]] == [0.9, 0.8, 0.7]

    def test_string_levels_are_parsed(self):
        view = display_orderbook({"bids": [["0.5", "10"]], "asks": []})
        assert view["bids"] == [[0.5, 10.0]]

    @pytest.mark.parametrize("book", [None, {}, {"bids": None, "asks": None}])
    def test_empty_book(self, book):
        assert display_orderbook(book, Outcome.NO) == {"asks": [], "bids": []}

    def test_invert_levels(self):
        assert invert_levels([[0.25, 4]]) == [[0.75, 4]]


class TestBestPrices:
    """Test best bid/ask per outcome."""

    def test_first_outcome(self):
        assert best_prices(BOOK, 0) == (0.45, 0.55)

    def test_second_outcome(self):
        bid, ask = best_prices(BOOK, 1)
        assert bid == pytest.approx(0.45)
        assert ask == pytest.approx(0.55)

    def test_empty_sides(self):
        assert best_prices({"bids": [], "asks": [[0.6, 1]]}, 0) == (None, 0.6)
        bid, ask = best_prices({"bids": [], "asks": [[0.6, 1]]}, 1)
        assert bid == pytest.approx(0.4)
        assert ask is None

    def test_no_book(self):
        assert best_prices(None, 1) == (None, None)
