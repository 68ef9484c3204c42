"""
Trading models and types.
"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Optional, Dict, Any


class Side(IntEnum):
    """Order side as encoded in signed orders."""
    BUY = 0
    SELL = 1

    @classmethod
    def parse(cls, value: Any) -> "Side":
        """Accept 0/1, "buy"/"sell" or "BUY"/"SELL"."""
        if isinstance(value, Side):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Invalid side: {value}") from None
        return cls(int(value))


class Strategy(str, Enum):
    """Order strategy sent with a submission."""
    LIMIT = "LIMIT"
    MARKET = "MARKET"


class Outcome(str, Enum):
    """Orderbook view. Upstream books are quoted for the first outcome."""
    YES = "yes"
    NO = "no"


class ApprovalKind(str, Enum):
    """Kind of on-chain permission."""
    ERC20 = "ERC20"      # collateral allowance
    ERC1155 = "ERC1155"  # conditional token operator approval


@dataclass
class ContractAddresses:
    """
    Contract address registry for one chain.

    Mirrors the signing SDK's per-chain registry; only the contracts that
    take part in approvals are kept.
    """
    ctf_exchange: str
    collateral: Optional[str] = None
    neg_risk_ctf_exchange: Optional[str] = None
    neg_risk_adapter: Optional[str] = None
    conditional_tokens: Optional[str] = None

    @classmethod
    def from_registry(cls, registry: Dict[str, Any]) -> "ContractAddresses":
        """Build from an SDK-style mapping (``CTF_EXCHANGE``, ``USDT`` ...)."""
        return cls(
            ctf_exchange=registry["CTF_EXCHANGE"],
            collateral=registry.get("USDT") or registry.get("COLLATERAL"),
            neg_risk_ctf_exchange=registry.get("NEG_RISK_CTF_EXCHANGE"),
            neg_risk_adapter=registry.get("NEG_RISK_ADAPTER"),
            conditional_tokens=registry.get("CONDITIONAL_TOKENS"),
        )

    def exchange_for(self, is_neg_risk: bool) -> str:
        """Exchange contract that settles orders of a market."""
        if is_neg_risk and self.neg_risk_ctf_exchange:
            return self.neg_risk_ctf_exchange
        return self.ctf_exchange


@dataclass
class OrderAmounts:
    """Fixed-point amounts of an order, all in wei (18 decimals)."""
    price_per_share: int
    maker_amount: int
    taker_amount: int


@dataclass
class TradeRequest:
    """
    A trade as entered by the user.

    ``price`` is ignored for market orders.
    """
    side: Side
    quantity: Decimal
    price: Optional[Decimal] = None
    outcome_index: int = 0
    strategy: Strategy = Strategy.LIMIT


@dataclass
class ApprovalRequirement:
    """A missing approval that blocks a trade."""
    kind: ApprovalKind
    token_name: str
    token_address: str
    spender_address: str
    required_amount: int = 0
    current_allowance: int = 0


@dataclass
class ApprovalStatus:
    """State of one (token, spender) pair for the approval manager view."""
    id: str
    kind: ApprovalKind
    token: str
    spender: str
    spender_address: str
    token_address: str
    is_approved: bool
    allowance: Optional[int] = None
    is_unlimited: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind.value,
            "token": self.token,
            "spender": self.spender,
            "spenderAddress": self.spender_address,
            "tokenAddress": self.token_address,
            "isApproved": self.is_approved,
            "allowance": str(self.allowance) if self.allowance is not None else None,
            "isUnlimited": self.is_unlimited,
        }


@dataclass
class OrderDisplay:
    """Values shown for an open order."""
    order_id: Optional[str]
    market_id: Optional[Any]
    is_buy: bool
    price: float
    amount: float
    filled: float
    market_title: str
    outcome_name: str
