"""
Tests for approval bookkeeping.
"""
import pytest

from predict_relay.api.exceptions import ApprovalError
from predict_relay.trading.approvals import (
    MAX_UINT256,
    approval_message,
    approval_status,
    approve_all,
    execute_approval,
    grant_approval,
    required_approval,
    revoke_approval,
    spenders,
)
from predict_relay.trading.models import (
    ApprovalKind,
    ApprovalRequirement,
    ApprovalStatus,
    ContractAddresses,
    Side,
)

OWNER = "0x0000000000000000000000000000000000000001"

ADDRESSES = ContractAddresses(
    ctf_exchange="0xexchange",
    collateral="0xusdt",
    neg_risk_ctf_exchange="0xnegexchange",
    neg_risk_adapter="0xadapter",
    conditional_tokens="0xct",
)


class FakeChain:
    """In-memory allowances and operator approvals."""

    def __init__(self, allowances=None, operators=None, fail=False):
        self.allowances = allowances or {}
        self.operators = operators or set()
        self.fail = fail
        self.sent = []

    async def allowance(self, token, owner, spender):
        if self.fail:
            raise ConnectionError("rpc down")
        return self.allowances.get(spender, 0)

    async def is_approved_for_all(self, token, owner, operator):
        if self.fail:
            raise ConnectionError("rpc down")
        return operator in self.operators

    async def approve(self, token, spender, amount):
        self.sent.append(("approve", token, spender, amount))
        self.allowances[spender] = amount
        return "0xtx1"

    async def set_approval_for_all(self, token, operator, approved):
        self.sent.append(("setApprovalForAll", token, operator, approved))
        self.operators.add(operator)
        return "0xtx2"


class RejectingApprover:
    async def approve(self, token, spender, amount):
        raise RuntimeError("User rejected the request")

    async def set_approval_for_all(self, token, operator, approved):
        raise RuntimeError("User rejected the request")


# ============================================================================
# Spenders & registry
# ============================================================================

def test_spenders():
    keys = [key for key, _, _ in spenders(ADDRESSES)]
    assert keys == ["CTF_EXCHANGE", "NEG_RISK_CTF_EXCHANGE", "NEG_RISK_ADAPTER"]


def test_spenders_skip_duplicate_exchange():
    addresses = ContractAddresses(ctf_exchange="0xa", neg_risk_ctf_exchange="0xa")
    assert [key for key, _, _ in spenders(addresses)] == ["CTF_EXCHANGE"]


def test_from_registry():
    addresses = ContractAddresses.from_registry({
        "CTF_EXCHANGE": "0x1",
        "NEG_RISK_CTF_EXCHANGE": "0x2",
        "USDT": "0x3",
        "CONDITIONAL_TOKENS": "0x4",
    })
    assert addresses.collateral == "0x3"
    assert addresses.exchange_for(True) == "0x2"
    assert addresses.exchange_for(False) == "0x1"


# ============================================================================
# Required approval
# ============================================================================

class TestRequiredApproval:

    @pytest.mark.asyncio
    async def test_buy_with_enough_allowance(self):
        chain = FakeChain(allowances={"0xexchange": 100})
        assert await required_approval(chain, ADDRESSES, OWNER, Side.BUY, required_amount=100) is None

    @pytest.mark.asyncio
    async def test_buy_short_allowance(self):
        chain = FakeChain(allowances={"0xexchange": 40})
        requirement = await required_approval(chain, ADDRESSES, OWNER, Side.BUY, required_amount=100)
        assert requirement.kind is ApprovalKind.ERC20
        assert requirement.token_address == "0xusdt"
        assert requirement.spender_address == "0xexchange"
        assert requirement.required_amount == 100
        assert requirement.current_allowance == 40

    @pytest.mark.asyncio
    async def test_buy_neg_risk_uses_neg_risk_exchange(self):
        chain = FakeChain(allowances={"0xexchange": 1000})
        requirement = await required_approval(
            chain, ADDRESSES, OWNER, Side.BUY, required_amount=100, is_neg_risk=True
        )
        assert requirement.spender_address == "0xnegexchange"

    @pytest.mark.asyncio
    async def test_sell_needs_operator(self):
        requirement = await required_approval(FakeChain(), ADDRESSES, OWNER, Side.SELL)
        assert requirement.kind is ApprovalKind.ERC1155
        assert requirement.token_address == "0xct"

    @pytest.mark.asyncio
    async def test_sell_approved(self):
        chain = FakeChain(operators={"0xexchange"})
        assert await required_approval(chain, ADDRESSES, OWNER, Side.SELL) is None

    @pytest.mark.asyncio
    async def test_read_failure_is_treated_as_approved(self):
        chain = FakeChain(fail=True)
        assert await required_approval(chain, ADDRESSES, OWNER, Side.BUY, required_amount=1) is None
        assert await required_approval(chain, ADDRESSES, OWNER, Side.SELL) is None

    @pytest.mark.asyncio
    async def test_missing_token_addresses(self):
        addresses = ContractAddresses(ctf_exchange="0xexchange")
        assert await required_approval(FakeChain(), addresses, OWNER, Side.BUY, required_amount=1) is None
        assert await required_approval(FakeChain(), addresses, OWNER, Side.SELL) is None


# ============================================================================
# Executing approvals
# ============================================================================

class TestExecuteApproval:

    @pytest.mark.asyncio
    async def test_erc20_exact_amount(self):
        chain = FakeChain()
        requirement = ApprovalRequirement(ApprovalKind.ERC20, "USDT", "0xusdt", "0xexchange", required_amount=123)
        tx_hash = await execute_approval(chain, requirement)
        assert tx_hash == "0xtx1"
        assert chain.sent == [("approve", "0xusdt", "0xexchange", 123)]

    @pytest.mark.asyncio
    async def test_erc1155_operator(self):
        chain = FakeChain()
        requirement = ApprovalRequirement(ApprovalKind.ERC1155, "Conditional Token", "0xct", "0xexchange")
        assert await execute_approval(chain, requirement) == "0xtx2"
        assert chain.sent == [("setApprovalForAll", "0xct", "0xexchange", True)]

    @pytest.mark.asyncio
    async def test_failure_wrapped(self):
        requirement = ApprovalRequirement(ApprovalKind.ERC20, "USDT", "0xusdt", "0xexchange", required_amount=1)
        with pytest.raises(ApprovalError) as exc_info:
            await execute_approval(RejectingApprover(), requirement)
        assert "User rejected the request" in str(exc_info.value)
        assert exc_info.value.requirement is requirement


def test_approval_message():
    erc20 = ApprovalRequirement(ApprovalKind.ERC20, "USDT", "0xusdt", "0xe", required_amount=5 * 10 ** 18)
    erc1155 = ApprovalRequirement(ApprovalKind.ERC1155, "Conditional Token", "0xct", "0xe")
    assert approval_message(erc20, Side.BUY) == "需要授权 5.00 USDT 才能买入"
    assert approval_message(erc1155, Side.SELL) == "需要授权 Conditional Token 才能卖出"


# ============================================================================
# Approval status
# ============================================================================

@pytest.mark.asyncio
async def test_approval_status():
    chain = FakeChain(
        allowances={"0xexchange": MAX_UINT256, "0xadapter": 10},
        operators={"0xnegexchange"},
    )
    statuses = {s.id: s for s in await approval_status(chain, ADDRESSES, OWNER)}

    assert set(statuses) == {
        "usdt_CTF_EXCHANGE", "usdt_NEG_RISK_CTF_EXCHANGE", "usdt_NEG_RISK_ADAPTER",
        "ct_CTF_EXCHANGE", "ct_NEG_RISK_CTF_EXCHANGE", "ct_NEG_RISK_ADAPTER",
    }
    assert statuses["usdt_CTF_EXCHANGE"].is_unlimited is True
    assert statuses["usdt_NEG_RISK_ADAPTER"].is_approved is True
    assert statuses["usdt_NEG_RISK_ADAPTER"].is_unlimited is False
    assert statuses["usdt_NEG_RISK_CTF_EXCHANGE"].is_approved is False
    assert statuses["ct_NEG_RISK_CTF_EXCHANGE"].is_approved is True
    assert statuses["ct_CTF_EXCHANGE"].is_approved is False

    data = statuses["usdt_NEG_RISK_ADAPTER"].to_dict()
    assert data["type"] == "ERC20"
    assert data["allowance"] == "10"
    assert data["spenderAddress"] == "0xadapter"


@pytest.mark.asyncio
async def test_approval_status_skips_failed_reads():
    assert await approval_status(FakeChain(fail=True), ADDRESSES, OWNER) == []


# ============================================================================
# Approval manager actions
# ============================================================================

def make_status(kind, spender_address, is_approved=False):
    token_address = "0xusdt" if kind is ApprovalKind.ERC20 else "0xct"
    return ApprovalStatus(
        id=f"{kind.value}_{spender_address}",
        kind=kind,
        token="USDT" if kind is ApprovalKind.ERC20 else "ConditionalTokens",
        spender=spender_address,
        spender_address=spender_address,
        token_address=token_address,
        is_approved=is_approved,
    )


class TestManagerActions:

    @pytest.mark.asyncio
    async def test_grant_erc20_is_unlimited(self):
        chain = FakeChain()
        await grant_approval(chain, make_status(ApprovalKind.ERC20, "0xexchange"))
        assert chain.sent == [("approve", "0xusdt", "0xexchange", MAX_UINT256)]

    @pytest.mark.asyncio
    async def test_grant_erc1155(self):
        chain = FakeChain()
        assert await grant_approval(chain, make_status(ApprovalKind.ERC1155, "0xadapter")) == "0xtx2"
        assert chain.sent == [("setApprovalForAll", "0xct", "0xadapter", True)]

    @pytest.mark.asyncio
    async def test_revoke_erc20_sets_zero(self):
        chain = FakeChain(allowances={"0xexchange": 50})
        await revoke_approval(chain, make_status(ApprovalKind.ERC20, "0xexchange", is_approved=True))
        assert chain.sent == [("approve", "0xusdt", "0xexchange", 0)]
        assert chain.allowances["0xexchange"] == 0

    @pytest.mark.asyncio
    async def test_revoke_erc1155(self):
        chain = FakeChain(operators={"0xexchange"})
        await revoke_approval(chain, make_status(ApprovalKind.ERC1155, "0xexchange", is_approved=True))
        assert chain.sent == [("setApprovalForAll", "0xct", "0xexchange", False)]

    @pytest.mark.asyncio
    async def test_failures_wrapped(self):
        status = make_status(ApprovalKind.ERC20, "0xexchange")
        with pytest.raises(ApprovalError, match="授权失败"):
            await grant_approval(RejectingApprover(), status)
        with pytest.raises(ApprovalError, match="取消授权失败"):
            await revoke_approval(RejectingApprover(), status)

    @pytest.mark.asyncio
    async def test_approve_all_skips_approved(self):
        chain = FakeChain()
        statuses = [
            make_status(ApprovalKind.ERC20, "0xexchange", is_approved=True),
            make_status(ApprovalKind.ERC20, "0xadapter"),
            make_status(ApprovalKind.ERC1155, "0xnegexchange"),
        ]
        assert await approve_all(chain, statuses) == ["0xtx1", "0xtx2"]
        assert chain.sent == [
            ("approve", "0xusdt", "0xadapter", MAX_UINT256),
            ("setApprovalForAll", "0xct", "0xnegexchange", True),
        ]

    @pytest.mark.asyncio
    async def test_approve_all_nothing_to_do(self):
        chain = FakeChain()
        assert await approve_all(chain, [make_status(ApprovalKind.ERC1155, "0xe", is_approved=True)]) == []
        assert chain.sent == []
