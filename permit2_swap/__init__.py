"""
permit2_swap - settle a single token swap through the 0x Permit2 API

Fetches a price and a firm quote, grants the Permit2 allowance when the
aggregator asks for it, signs the EIP-712 permit and broadcasts the
settlement transaction with the signature appended to its call data.

Usage:
    from permit2_swap import SwapPipeline

    with SwapPipeline.from_config() as pipeline:
        request = pipeline.build_trade_request("WETH", "WSTETH", "0.1", affiliate_fee_bps=100)
        result = pipeline.execute(request)
        print(result.tx_hash)
"""

__version__ = "0.1.0"

from .config import Config, config, get_config, reload_config, setup_logging
from .errors import (
    ErrorCode,
    SwapError,
    QuoteUnavailable,
    AllowanceError,
    SignerError,
    SubmissionError,
    ConfigurationError,
)
from .types import TradeRequest, PriceResult, Quote, SwapResult, TxStatus
from .infra import EVMSigner, ChainClient, create_web3, create_evm_signer
from .protocols import ZeroExAPI
from .modules import (
    AllowanceManager,
    PermitSigner,
    TransactionSubmitter,
    SwapPipeline,
)

__all__ = [
    # Config
    "Config",
    "config",
    "get_config",
    "reload_config",
    "setup_logging",
    # Errors
    "ErrorCode",
    "SwapError",
    "QuoteUnavailable",
    "AllowanceError",
    "SignerError",
    "SubmissionError",
    "ConfigurationError",
    # Types
    "TradeRequest",
    "PriceResult",
    "Quote",
    "SwapResult",
    "TxStatus",
    # Infra
    "EVMSigner",
    "ChainClient",
    "create_web3",
    "create_evm_signer",
    # Aggregator
    "ZeroExAPI",
    # Pipeline
    "AllowanceManager",
    "PermitSigner",
    "TransactionSubmitter",
    "SwapPipeline",
]
