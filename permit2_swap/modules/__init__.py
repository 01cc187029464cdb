"""
Swap pipeline stages

- AllowanceManager: Unlimited ERC-20 approval for the aggregator spender
- PermitSigner: EIP-712 Permit2 signature and call data encoding
- TransactionSubmitter: Transaction assembly, signing and broadcast
- SwapPipeline: Runs the stages in order for one trade
"""

from .allowance import AllowanceManager, MAX_UINT256
from .permit import (
    PermitSigner,
    encode_signature_length,
    append_signature,
    SIGNATURE_LENGTH_SIZE,
)
from .submit import TransactionSubmitter
from .swap import SwapPipeline

__all__ = [
    "AllowanceManager",
    "MAX_UINT256",
    "PermitSigner",
    "encode_signature_length",
    "append_signature",
    "SIGNATURE_LENGTH_SIZE",
    "TransactionSubmitter",
    "SwapPipeline",
]
