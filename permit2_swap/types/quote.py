"""
Aggregator response types

The 0x API omits fields that do not apply to a trade (no allowance issue, no
permit, no tax metadata). Every optional part of a response is therefore an
Optional attribute here, and a field that is missing or malformed parses as
absent rather than raising.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Optional, List, Dict, Any


def _opt_int(value: Any) -> Optional[int]:
    """Parse an integer-like JSON value; None when absent or malformed"""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _opt_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class AllowanceIssue:
    """Spender that needs an ERC-20 allowance before the trade can settle"""
    spender: str
    actual: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["AllowanceIssue"]:
        data = _opt_dict(data)
        spender = data.get("spender")
        if not spender:
            return None
        return cls(spender=spender, actual=_opt_int(data.get("actual")))


@dataclass(frozen=True)
class Issues:
    """Problems the aggregator detected for the taker"""
    allowance: Optional[AllowanceIssue] = None
    simulation_incomplete: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> "Issues":
        data = _opt_dict(data)
        return cls(
            allowance=AllowanceIssue.from_dict(data.get("allowance")),
            simulation_incomplete=bool(data.get("simulationIncomplete", False)),
        )


@dataclass(frozen=True)
class Fill:
    """Portion of a trade executed against one liquidity source"""
    source: str
    proportion_bps: int
    from_token: Optional[str] = None
    to_token: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Fill"]:
        data = _opt_dict(data)
        proportion = _opt_int(data.get("proportionBps"))
        if not data.get("source") or proportion is None:
            return None
        return cls(
            source=data["source"],
            proportion_bps=proportion,
            from_token=data.get("from"),
            to_token=data.get("to"),
        )


@dataclass(frozen=True)
class Route:
    """Ordered liquidity-source contributions of a trade"""
    fills: List[Fill] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "Route":
        raw_fills = _opt_dict(data).get("fills") or []
        fills = [Fill.from_dict(f) for f in raw_fills] if isinstance(raw_fills, list) else []
        return cls(fills=[f for f in fills if f is not None])


@dataclass(frozen=True)
class TokenTax:
    """Transfer taxes of a token in basis points"""
    buy_tax_bps: int = 0
    sell_tax_bps: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "TokenTax":
        data = _opt_dict(data)
        return cls(
            buy_tax_bps=_opt_int(data.get("buyTaxBps")) or 0,
            sell_tax_bps=_opt_int(data.get("sellTaxBps")) or 0,
        )


@dataclass(frozen=True)
class TokenMetadata:
    """Tax metadata of the traded tokens"""
    buy_token: TokenTax = field(default_factory=TokenTax)
    sell_token: TokenTax = field(default_factory=TokenTax)

    @classmethod
    def from_dict(cls, data: Any) -> Optional["TokenMetadata"]:
        if not isinstance(data, dict):
            return None
        return cls(
            buy_token=TokenTax.from_dict(data.get("buyToken")),
            sell_token=TokenTax.from_dict(data.get("sellToken")),
        )


@dataclass(frozen=True)
class Permit2Data:
    """
    Permit2 consent message issued by the aggregator.

    eip712 is the complete typed-data payload (types, domain, primaryType,
    message) and must be signed exactly as received.
    """
    eip712: Optional[Dict[str, Any]] = None
    type: Optional[str] = None
    hash: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Permit2Data"]:
        if not isinstance(data, dict):
            return None
        eip712 = data.get("eip712")
        return cls(
            eip712=eip712 if isinstance(eip712, dict) and eip712 else None,
            type=data.get("type"),
            hash=data.get("hash"),
        )


@dataclass(frozen=True)
class QuoteTransaction:
    """Transaction prepared by the aggregator, before the signature is appended"""
    to: Optional[str] = None
    data: Optional[str] = None
    value: Optional[int] = None
    gas: Optional[int] = None
    gas_price: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["QuoteTransaction"]:
        if not isinstance(data, dict):
            return None
        return cls(
            to=data.get("to") or None,
            data=data.get("data") or None,
            value=_opt_int(data.get("value")),
            gas=_opt_int(data.get("gas")),
            gas_price=_opt_int(data.get("gasPrice")),
        )


@dataclass(frozen=True)
class PriceResult:
    """
    Indicative price (/swap/permit2/price).

    Advisory only: confirms liquidity and surfaces allowance/tax issues before
    the binding quote is requested.
    """
    sell_token: Optional[str] = None
    buy_token: Optional[str] = None
    sell_amount: Optional[int] = None
    buy_amount: Optional[int] = None
    min_buy_amount: Optional[int] = None
    liquidity_available: bool = True
    issues: Issues = field(default_factory=Issues)
    route: Route = field(default_factory=Route)
    token_metadata: Optional[TokenMetadata] = None
    gas: Optional[int] = None
    gas_price: Optional[int] = None
    zid: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @staticmethod
    def _common_fields(data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "sell_token": data.get("sellToken"),
            "buy_token": data.get("buyToken"),
            "sell_amount": _opt_int(data.get("sellAmount")),
            "buy_amount": _opt_int(data.get("buyAmount")),
            "min_buy_amount": _opt_int(data.get("minBuyAmount")),
            "liquidity_available": bool(data.get("liquidityAvailable", True)),
            "issues": Issues.from_dict(data.get("issues")),
            "route": Route.from_dict(data.get("route")),
            "token_metadata": TokenMetadata.from_dict(data.get("tokenMetadata")),
            "gas": _opt_int(data.get("gas")),
            "gas_price": _opt_int(data.get("gasPrice")),
            "zid": data.get("zid"),
            "raw": data,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "PriceResult":
        return cls(**cls._common_fields(_opt_dict(data)))

    @property
    def needs_allowance(self) -> bool:
        return self.issues.allowance is not None


@dataclass(frozen=True)
class Quote(PriceResult):
    """
    Firm quote (/swap/permit2/quote).

    A read-only snapshot: it is consumed once by the submitter and never
    refreshed. Expiry is enforced by the aggregator.
    """
    permit2: Optional[Permit2Data] = None
    transaction: Optional[QuoteTransaction] = None
    affiliate_fee_bps: Optional[int] = None
    trade_surplus: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Quote":
        data = _opt_dict(data)
        fields = cls._common_fields(data)
        surplus = data.get("tradeSurplus")
        return cls(
            permit2=Permit2Data.from_dict(data.get("permit2")),
            transaction=QuoteTransaction.from_dict(data.get("transaction")),
            affiliate_fee_bps=_opt_int(data.get("affiliateFeeBps")),
            trade_surplus=str(surplus) if surplus is not None else None,
            **fields,
        )

    @property
    def eip712(self) -> Optional[Dict[str, Any]]:
        """Typed-data payload, or None when the permit path does not apply"""
        return self.permit2.eip712 if self.permit2 else None

    @property
    def call_data(self) -> Optional[str]:
        return self.transaction.data if self.transaction else None

    @property
    def surplus_amount(self) -> Decimal:
        """Trade surplus as a number (0 when absent or malformed)"""
        if self.trade_surplus is None:
            return Decimal(0)
        try:
            return Decimal(self.trade_surplus)
        except InvalidOperation:
            return Decimal(0)


@dataclass(frozen=True)
class LiquiditySource:
    """Liquidity venue known to the aggregator"""
    name: str


@dataclass(frozen=True)
class AssembledTransaction:
    """
    Transaction ready for local signing.

    data is the quote's call data with the length-prefixed permit signature
    appended.
    """
    to: str
    data: bytes
    value: int
    gas: int
    gas_price: int
    nonce: int
    chain_id: int

    def to_tx_dict(self) -> Dict[str, Any]:
        """Legacy (gasPrice) transaction dict accepted by eth_account"""
        return {
            "to": self.to,
            "data": self.data,
            "value": self.value,
            "gas": self.gas,
            "gasPrice": self.gas_price,
            "nonce": self.nonce,
            "chainId": self.chain_id,
        }
