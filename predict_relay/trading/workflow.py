"""
Approval + order-construction workflow.

A linear sequence: validate input, compute amounts, check and request the
missing approval, have the order signed, submit it upstream. Nothing is
retried; a failed step raises and the user resubmits.
"""
from typing import Any, Dict, Optional, Protocol

from predict_relay.api.client import PredictClient
from predict_relay.api.exceptions import OrderError, ValidationError
from predict_relay.logging import logger, log_timing
from predict_relay.trading.amounts import build_order_args, order_amounts
from predict_relay.trading.approvals import (
    Approver,
    ChainReader,
    approval_message,
    execute_approval,
    required_approval,
)
from predict_relay.trading.errors import error_description
from predict_relay.trading.models import (
    ContractAddresses,
    OrderAmounts,
    Side,
    Strategy,
    TradeRequest,
)

SIGNED_ORDER_FIELDS = (
    "salt",
    "maker",
    "signer",
    "taker",
    "tokenId",
    "makerAmount",
    "takerAmount",
    "expiration",
    "nonce",
    "feeRateBps",
)


class OrderSigner(Protocol):
    """
    Signs orders with the user's wallet (EIP-712 typed data).

    Returns the signed order including its ``hash`` and ``signature``.
    """

    async def sign(self, order: Dict[str, Any], is_neg_risk: bool) -> Dict[str, Any]: ...


def token_id_for(market: Dict[str, Any], outcome_index: int) -> str:
    """On-chain token id of a market outcome, "0" when unknown."""
    outcomes = market.get("outcomesDetail") or []
    outcome = outcomes[outcome_index] if 0 <= outcome_index < len(outcomes) else {}
    return str(outcome.get("onChainId") or "0")


def build_submission(signed: Dict[str, Any], amounts: OrderAmounts, strategy: Strategy) -> Dict[str, Any]:
    """
    Upstream submission payload for a signed order.

    Integer fields are sent as decimal strings.
    """
    order = {"hash": signed.get("hash")}
    for name in SIGNED_ORDER_FIELDS:
        order[name] = str(signed[name]) if name in signed and signed[name] is not None else None
    order["side"] = int(signed["side"])
    order["signatureType"] = signed.get("signatureType")
    order["signature"] = signed.get("signature")

    return {
        "data": {
            "pricePerShare": str(amounts.price_per_share or 0),
            "strategy": Strategy(strategy).value,
            "order": order,
        }
    }


class OrderWorkflow:
    """
    Places a trade for one wallet.

    Example:
        workflow = OrderWorkflow(client, gateway, gateway, signer, addresses)
        response = await workflow.submit(market, trade, owner, f"Bearer {jwt}")
    """

    def __init__(
        self,
        client: PredictClient,
        reader: ChainReader,
        approver: Approver,
        signer: OrderSigner,
        addresses: ContractAddresses,
    ):
        self.client = client
        self.reader = reader
        self.approver = approver
        self.signer = signer
        self.addresses = addresses

    def prepare(self, market: Dict[str, Any], trade: TradeRequest, owner: str):
        """
        Compute amounts and unsigned order fields.

        Returns:
            ``(amounts, order_args)``

        Raises:
            ValidationError: For invalid quantity or price
        """
        amounts = order_amounts(trade.side, trade.strategy, trade.quantity, trade.price)
        order_args = build_order_args(
            maker=owner,
            side=trade.side,
            token_id=token_id_for(market, trade.outcome_index),
            amounts=amounts,
            fee_rate_bps=market.get("feeRateBps") or 100,
        )
        return amounts, order_args

    @log_timing
    async def submit(
        self,
        market: Dict[str, Any],
        trade: TradeRequest,
        owner: str,
        authorization: Optional[str],
    ) -> Dict[str, Any]:
        """
        Run the whole workflow and return the upstream response.

        Raises:
            ValidationError: Missing authorization or invalid input
            ApprovalError: A required approval was not granted
            OrderError: The upstream rejected the order
        """
        if not authorization:
            raise ValidationError("authorization", "请先认证（重新连接钱包）")

        log = logger.with_context(market_id=market.get("id"), side=Side(trade.side).name)
        is_neg_risk = bool(market.get("isNegRisk"))

        amounts, order_args = self.prepare(market, trade, owner)
        log.trade("amounts computed", maker_amount=amounts.maker_amount, taker_amount=amounts.taker_amount)

        required_amount = amounts.maker_amount if Side(trade.side) is Side.BUY else 0
        requirement = await required_approval(
            self.reader,
            self.addresses,
            owner,
            trade.side,
            required_amount=required_amount,
            is_neg_risk=is_neg_risk,
        )
        if requirement is not None:
            log.trade(approval_message(requirement, trade.side), spender=requirement.spender_address)
            tx_hash = await execute_approval(self.approver, requirement)
            log.trade("approval confirmed", tx_hash=tx_hash)

        signed = await self.signer.sign(order_args, is_neg_risk)
        payload = build_submission(signed, amounts, trade.strategy)

        response = await self.client.create_order(payload, authorization=authorization)
        if not isinstance(response, dict) or not response.get("success"):
            description = error_description(response)
            log.warning("order rejected", error=description)
            raise OrderError(400, description, response_data=response)

        log.trade("order submitted", order_hash=signed.get("hash"))
        return response
