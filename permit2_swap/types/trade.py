"""
Trade request definition
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from typing import Dict, Union

from ..errors import ConfigurationError


def to_raw_amount(amount: Union[Decimal, str, int], decimals: int) -> int:
    """
    Convert a UI amount into the token's smallest integer unit.

    Args:
        amount: Amount in UI units (e.g. "0.1" WETH)
        decimals: Token decimals

    Returns:
        Integer amount, e.g. to_raw_amount("0.1", 18) == 100000000000000000

    Raises:
        ConfigurationError: If the amount is not a positive number or has more
            fractional digits than the token supports
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ConfigurationError.invalid("sell_amount", f"not a number: {amount!r}")

    if not value.is_finite():
        raise ConfigurationError.invalid("sell_amount", f"must be a finite number, got {amount}")
    if value <= 0:
        raise ConfigurationError.invalid("sell_amount", f"must be positive, got {amount}")

    # Context precision must cover every digit of the scaled amount, otherwise it is rounded
    with localcontext() as ctx:
        ctx.prec = len(value.as_tuple().digits) + decimals + 2
        scaled = value * (Decimal(10) ** decimals)
        if scaled != scaled.to_integral_value():
            raise ConfigurationError.invalid(
                "sell_amount", f"{amount} has more precision than {decimals} decimals"
            )
        return int(scaled)


@dataclass(frozen=True)
class TradeRequest:
    """
    Parameters of one swap, shared verbatim by the price and quote requests.

    Attributes:
        chain_id: EVM chain ID
        sell_token: Sell token address
        buy_token: Buy token address
        sell_amount: Sell amount in the sell token's smallest unit
        taker: Address that sells and receives
        affiliate_fee_bps: Affiliate fee in basis points (100 = 1%)
        surplus_collection: Whether the aggregator may collect trade surplus
    """
    chain_id: int
    sell_token: str
    buy_token: str
    sell_amount: int
    taker: str
    affiliate_fee_bps: int = 0
    surplus_collection: bool = False

    def __post_init__(self):
        if self.sell_amount <= 0:
            raise ConfigurationError.invalid("sell_amount", f"must be positive, got {self.sell_amount}")

    def to_query_params(self) -> Dict[str, str]:
        """Query string parameters for the price and quote endpoints"""
        return {
            "chainId": str(self.chain_id),
            "sellToken": self.sell_token,
            "buyToken": self.buy_token,
            "sellAmount": str(self.sell_amount),
            "taker": self.taker,
            "affiliateFee": str(self.affiliate_fee_bps),
            "surplusCollection": "true" if self.surplus_collection else "false",
        }
