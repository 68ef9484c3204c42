"""
Translation of known upstream error messages for the dashboard's toasts.
"""
from typing import Optional

UNKNOWN_ERROR = "未知错误"

ERROR_TRANSLATIONS = {
    "Insufficient shares: available balance is less than the total ask amount.": "份额不足：可用余额小于卖出总量",
    "Insufficient collateral: available allowance is less than the total bid amount.": "抵押品不足：授权额度小于买入总量",
    "Price precision is 3. Max allowed is 2 decimal points": "价格精度错误：最多允许2位小数",
    "Order must have a value of at least 0.9 USD": "订单价值必须至少为 0.9 USD",
    "InvalidSignature": "签名无效，请重新连接钱包",
    "Neg risk adapter not approved by the owner": "NegRisk Adapter 未授权，请先授权",
    "Operator not approved": "合约未授权，请先在授权管理中授权",
    "User rejected the request": "用户拒绝了请求",
    "User denied transaction signature": "用户拒绝签名",
}


def translate_error(message: Optional[str]) -> str:
    """
    Translate an upstream error message.

    An exact match wins; otherwise the first known message contained in
    ``message`` is used. Unknown messages are returned unchanged.
    """
    if not message:
        return UNKNOWN_ERROR

    if message in ERROR_TRANSLATIONS:
        return ERROR_TRANSLATIONS[message]

    for key, value in ERROR_TRANSLATIONS.items():
        if key in message:
            return value

    return message


def error_description(body: object, fallback: str = "订单提交失败") -> str:
    """
    Pick the error text out of a failed submission envelope.

    Order: ``error.description``, ``error``, ``message``, fallback.
    """
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("description"):
            return str(error["description"])
        if error and not isinstance(error, dict):
            return str(error)
        if body.get("message"):
            return str(body["message"])
    return fallback
