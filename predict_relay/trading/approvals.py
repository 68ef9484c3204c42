"""
Token approval bookkeeping.

Before a trade the exchange contract must be allowed to move the user's
tokens: collateral (ERC-20 allowance) for buys, conditional tokens (ERC-1155
operator approval) for sells. This module decides which approval is missing
and requests it through an injected approver.
"""
import asyncio
import logging
from typing import Any, List, Optional, Protocol, Tuple

from web3 import Web3
from eth_account import Account

from predict_relay.api.exceptions import ApprovalError, ConfigurationError
from predict_relay.trading.amounts import format_wei
from predict_relay.trading.models import (
    ApprovalKind,
    ApprovalRequirement,
    ApprovalStatus,
    ContractAddresses,
    Side,
)

logger = logging.getLogger(__name__)

MAX_UINT256 = 2 ** 256 - 1

COLLATERAL_NAME = "USDT"
CONDITIONAL_TOKEN_NAME = "Conditional Token"

ERC20_ABI = [
    {
        "name": "approve",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "allowance",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "uint256"}],
    },
]

ERC1155_ABI = [
    {
        "name": "setApprovalForAll",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "operator", "type": "address"},
            {"name": "approved", "type": "bool"},
        ],
        "outputs": [],
    },
    {
        "name": "isApprovedForAll",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "account", "type": "address"},
            {"name": "operator", "type": "address"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
]


class ChainReader(Protocol):
    """Read-only view of token permissions."""

    async def allowance(self, token: str, owner: str, spender: str) -> int: ...

    async def is_approved_for_all(self, token: str, owner: str, operator: str) -> bool: ...


class Approver(Protocol):
    """Sends approval transactions and waits for them to be mined."""

    async def approve(self, token: str, spender: str, amount: int) -> str: ...

    async def set_approval_for_all(self, token: str, operator: str, approved: bool) -> str: ...


def spenders(addresses: ContractAddresses) -> List[Tuple[str, str, str]]:
    """
    Contracts that may need permissions, as ``(key, name, address)``.

    The neg-risk exchange is listed only when it differs from the main one.
    """
    result = [("CTF_EXCHANGE", "CTF Exchange", addresses.ctf_exchange)]
    if addresses.neg_risk_ctf_exchange and addresses.neg_risk_ctf_exchange != addresses.ctf_exchange:
        result.append(("NEG_RISK_CTF_EXCHANGE", "NegRisk CTF Exchange", addresses.neg_risk_ctf_exchange))
    if addresses.neg_risk_adapter:
        result.append(("NEG_RISK_ADAPTER", "NegRisk Adapter", addresses.neg_risk_adapter))
    return result


async def required_approval(
    reader: ChainReader,
    addresses: ContractAddresses,
    owner: str,
    side: Side,
    required_amount: int = 0,
    is_neg_risk: bool = False,
) -> Optional[ApprovalRequirement]:
    """
    Find the approval a trade is missing, if any.

    A buy needs a collateral allowance of at least ``required_amount`` (the
    order's maker amount) for the market's exchange; a sell needs operator
    approval on the conditional tokens. A failed chain read is logged and
    treated as approved; the upstream rejects the order if it was not.

    Returns:
        The missing approval, or None when the trade can proceed
    """
    exchange = addresses.exchange_for(is_neg_risk)

    if Side(side) is Side.BUY:
        if not addresses.collateral:
            return None
        try:
            allowance = await reader.allowance(addresses.collateral, owner, exchange)
        except Exception as e:
            logger.error(f"Error checking {COLLATERAL_NAME} allowance: {e}")
            return None
        if allowance < required_amount:
            return ApprovalRequirement(
                kind=ApprovalKind.ERC20,
                token_name=COLLATERAL_NAME,
                token_address=addresses.collateral,
                spender_address=exchange,
                required_amount=required_amount,
                current_allowance=allowance,
            )
        return None

    if not addresses.conditional_tokens:
        return None
    try:
        approved = await reader.is_approved_for_all(addresses.conditional_tokens, owner, exchange)
    except Exception as e:
        logger.error(f"Error checking {CONDITIONAL_TOKEN_NAME} approval: {e}")
        return None
    if not approved:
        return ApprovalRequirement(
            kind=ApprovalKind.ERC1155,
            token_name=CONDITIONAL_TOKEN_NAME,
            token_address=addresses.conditional_tokens,
            spender_address=exchange,
        )
    return None


def approval_message(requirement: ApprovalRequirement, side: Side) -> str:
    """Banner text shown while an approval is requested."""
    if requirement.kind is ApprovalKind.ERC20 and requirement.required_amount:
        return f"需要授权 {format_wei(requirement.required_amount)} {requirement.token_name} 才能买入"
    action = "买入" if Side(side) is Side.BUY else "卖出"
    return f"需要授权 {requirement.token_name} 才能{action}"


async def execute_approval(approver: Approver, requirement: ApprovalRequirement) -> str:
    """
    Request a missing approval.

    Collateral is approved for exactly the required amount, never unlimited.

    Returns:
        Transaction hash of the mined approval

    Raises:
        ApprovalError: If the transaction fails or is rejected
    """
    try:
        if requirement.kind is ApprovalKind.ERC20:
            logger.info(
                f"Approving {format_wei(requirement.required_amount)} {requirement.token_name} "
                f"for {requirement.spender_address}"
            )
            return await approver.approve(
                requirement.token_address,
                requirement.spender_address,
                requirement.required_amount,
            )
        logger.info(f"Approving {requirement.token_name} operator {requirement.spender_address}")
        return await approver.set_approval_for_all(
            requirement.token_address,
            requirement.spender_address,
            True,
        )
    except ApprovalError:
        raise
    except Exception as e:
        raise ApprovalError(f"授权失败: {e}", requirement) from e


async def grant_approval(approver: Approver, status: ApprovalStatus) -> str:
    """
    Grant one pair from the approval manager.

    Unlike trade approvals, collateral is approved for ``MAX_UINT256`` here:
    the user asked for a standing permission.

    Raises:
        ApprovalError: If the transaction fails or is rejected
    """
    try:
        if status.kind is ApprovalKind.ERC20:
            return await approver.approve(status.token_address, status.spender_address, MAX_UINT256)
        return await approver.set_approval_for_all(status.token_address, status.spender_address, True)
    except Exception as e:
        raise ApprovalError(f"授权失败: {e}") from e


async def revoke_approval(approver: Approver, status: ApprovalStatus) -> str:
    """
    Revoke one pair: allowance back to 0, or operator approval removed.

    Raises:
        ApprovalError: If the transaction fails or is rejected
    """
    try:
        if status.kind is ApprovalKind.ERC20:
            return await approver.approve(status.token_address, status.spender_address, 0)
        return await approver.set_approval_for_all(status.token_address, status.spender_address, False)
    except Exception as e:
        raise ApprovalError(f"取消授权失败: {e}") from e


async def approve_all(approver: Approver, statuses: List[ApprovalStatus]) -> List[str]:
    """
    Grant every pair that is not approved yet, one transaction at a time.

    Stops at the first failure; pairs granted before it stay granted.

    Returns:
        Transaction hashes in the order they were sent
    """
    tx_hashes = []
    for status in statuses:
        if status.is_approved:
            continue
        logger.info(f"Approving {status.token} for {status.spender}")
        tx_hashes.append(await grant_approval(approver, status))
    return tx_hashes


async def approval_status(
    reader: ChainReader,
    addresses: ContractAddresses,
    owner: str,
) -> List[ApprovalStatus]:
    """
    State of every (token, spender) pair for the approval manager.

    Pairs whose read fails are logged and left out.
    """
    results: List[ApprovalStatus] = []
    contracts = spenders(addresses)

    if addresses.collateral:
        for key, name, address in contracts:
            try:
                allowance = await reader.allowance(addresses.collateral, owner, address)
            except Exception as e:
                logger.error(f"Error checking {COLLATERAL_NAME} allowance for {key}: {e}")
                continue
            results.append(ApprovalStatus(
                id=f"usdt_{key}",
                kind=ApprovalKind.ERC20,
                token=COLLATERAL_NAME,
                spender=name,
                spender_address=address,
                token_address=addresses.collateral,
                is_approved=allowance > 0,
                allowance=allowance,
                is_unlimited=allowance >= MAX_UINT256 // 2,
            ))

    if addresses.conditional_tokens:
        for key, name, address in contracts:
            try:
                approved = await reader.is_approved_for_all(addresses.conditional_tokens, owner, address)
            except Exception as e:
                logger.error(f"Error checking CT approval for {key}: {e}")
                continue
            results.append(ApprovalStatus(
                id=f"ct_{key}",
                kind=ApprovalKind.ERC1155,
                token="ConditionalTokens",
                spender=name,
                spender_address=address,
                token_address=addresses.conditional_tokens,
                is_approved=bool(approved),
            ))

    return results


class Web3Gateway:
    """
    web3-backed chain reader and approver.

    Reads work without a key; approvals need ``private_key``. Calls run in
    the default executor since web3's HTTP provider is synchronous.
    """

    def __init__(
        self,
        rpc_url: str,
        chain_id: int,
        private_key: Optional[str] = None,
        receipt_timeout: float = 120,
    ):
        self.w3 = Web3(Web3.HTTPProvider(rpc_url))
        self.chain_id = chain_id
        self.account = Account.from_key(private_key) if private_key else None
        self.receipt_timeout = receipt_timeout

    @property
    def address(self) -> Optional[str]:
        return self.account.address if self.account else None

    async def _run(self, func, *args) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    def _erc20(self, token: str):
        return self.w3.eth.contract(address=Web3.to_checksum_address(token), abi=ERC20_ABI)

    def _erc1155(self, token: str):
        return self.w3.eth.contract(address=Web3.to_checksum_address(token), abi=ERC1155_ABI)

    async def allowance(self, token: str, owner: str, spender: str) -> int:
        call = self._erc20(token).functions.allowance(
            Web3.to_checksum_address(owner), Web3.to_checksum_address(spender)
        )
        return int(await self._run(call.call))

    async def is_approved_for_all(self, token: str, owner: str, operator: str) -> bool:
        call = self._erc1155(token).functions.isApprovedForAll(
            Web3.to_checksum_address(owner), Web3.to_checksum_address(operator)
        )
        return bool(await self._run(call.call))

    def _send(self, function) -> str:
        if self.account is None:
            raise ConfigurationError("A private key is required to send approval transactions")

        tx = function.build_transaction({
            "from": self.account.address,
            "chainId": self.chain_id,
            "nonce": self.w3.eth.get_transaction_count(self.account.address),
            "gasPrice": self.w3.eth.gas_price,
        })
        signed = self.account.sign_transaction(tx)
        tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        if receipt["status"] != 1:
            raise ApprovalError(f"Approval transaction reverted: {Web3.to_hex(tx_hash)}")
        return Web3.to_hex(tx_hash)

    async def approve(self, token: str, spender: str, amount: int) -> str:
        function = self._erc20(token).functions.approve(Web3.to_checksum_address(spender), int(amount))
        return await self._run(self._send, function)

    async def set_approval_for_all(self, token: str, operator: str, approved: bool) -> str:
        function = self._erc1155(token).functions.setApprovalForAll(
            Web3.to_checksum_address(operator), approved
        )
        return await self._run(self._send, function)
