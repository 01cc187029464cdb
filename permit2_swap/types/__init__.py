"""
Type definitions for the Permit2 swap pipeline
"""

from .trade import TradeRequest, to_raw_amount
from .quote import (
    AllowanceIssue,
    Issues,
    Fill,
    Route,
    TokenTax,
    TokenMetadata,
    Permit2Data,
    QuoteTransaction,
    PriceResult,
    Quote,
    LiquiditySource,
    AssembledTransaction,
)
from .result import SwapResult, TxStatus
from .tokens import (
    EVMChain,
    EVMToken,
    SCROLL_TOKENS,
    get_token,
    get_token_decimals,
    get_token_symbol,
    resolve_token_address,
)

__all__ = [
    # Trade
    "TradeRequest",
    "to_raw_amount",
    # Aggregator responses
    "AllowanceIssue",
    "Issues",
    "Fill",
    "Route",
    "TokenTax",
    "TokenMetadata",
    "Permit2Data",
    "QuoteTransaction",
    "PriceResult",
    "Quote",
    "LiquiditySource",
    "AssembledTransaction",
    # Results
    "SwapResult",
    "TxStatus",
    # Tokens
    "EVMChain",
    "EVMToken",
    "SCROLL_TOKENS",
    "get_token",
    "get_token_decimals",
    "get_token_symbol",
    "resolve_token_address",
]
