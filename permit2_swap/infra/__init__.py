"""
Infrastructure layer for the Permit2 swap pipeline

Provides:
- EVMSigner: Transaction and EIP-712 signing using eth-account
- ChainClient: Web3-backed chain reads, approvals and broadcast
"""

from .evm_signer import (
    EVMSigner,
    create_web3,
    create_evm_signer,
)
from .chain_client import ChainClient, ERC20_ABI

__all__ = [
    "EVMSigner",
    "create_web3",
    "create_evm_signer",
    "ChainClient",
    "ERC20_ABI",
]
