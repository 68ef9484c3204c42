"""
Tests for upstream error translation.
"""
import pytest

from predict_relay.trading.errors import (
    ERROR_TRANSLATIONS,
    UNKNOWN_ERROR,
    error_description,
    translate_error,
)


@pytest.mark.parametrize("message", [None, ""])
def test_empty_message(message):
    assert translate_error(message) == UNKNOWN_ERROR


def test_exact_match():
    assert translate_error("InvalidSignature") == "签名无效，请重新连接钱包"


def test_contained_match():
    message = "Error: Operator not approved (code 3)"
    assert translate_error(message) == ERROR_TRANSLATIONS["Operator not approved"]


def test_unknown_message_unchanged():
    assert translate_error("Something else broke") == "Something else broke"


def test_known_messages():
    for key, value in ERROR_TRANSLATIONS.items():
        assert translate_error(key) == value


class TestErrorDescription:

    def test_nested_description(self):
        body = {"success": False, "error": {"description": "Order too small"}}
        assert error_description(body) == "Order too small"

    def test_string_error(self):
        assert error_description({"error": "InvalidSignature"}) == "InvalidSignature"

    def test_message(self):
        assert error_description({"error": {}, "message": "Bad price"}) == "Bad price"

    def test_fallback(self):
        assert error_description({}) == "订单提交失败"
        assert error_description(None, fallback="x") == "x"
