"""
EVM Signer using eth-account

Provides local signing of transactions and EIP-712 typed data.
Only supports local private key signing (no remote signer).
"""

from __future__ import annotations

import logging
from typing import Optional, Dict, Any, Tuple

from web3 import Web3, HTTPProvider
from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..errors import SignerError, ConfigurationError

logger = logging.getLogger(__name__)


class EVMSigner:
    """
    Local EVM signer

    Usage:
        signer = EVMSigner.from_private_key("0x...")
        signature = signer.sign_typed_data(quote.eip712)
        raw_tx, tx_hash = signer.sign_transaction(tx_dict)
    """

    def __init__(self, account: LocalAccount):
        """
        Initialize with eth_account LocalAccount

        Args:
            account: LocalAccount from eth_account
        """
        self._account = account

    @property
    def address(self) -> str:
        """Get wallet address (checksummed)"""
        return self._account.address

    def sign_typed_data(self, payload: Dict[str, Any]) -> bytes:
        """
        Sign an EIP-712 payload as given

        Args:
            payload: Full typed-data message (types, domain, primaryType, message)

        Returns:
            65-byte signature (r || s || v)

        Raises:
            SignerError: If the payload cannot be encoded or signed
        """
        try:
            signed = self._account.sign_typed_data(full_message=payload)
        except Exception as e:
            raise SignerError.failed(f"typed data rejected: {e}", e) from e
        return bytes(signed.signature)

    def sign_transaction(self, tx_dict: Dict[str, Any]) -> Tuple[bytes, str]:
        """
        Sign a transaction

        Args:
            tx_dict: Transaction dictionary with to, data, value, gas, gasPrice, nonce, chainId

        Returns:
            (raw_tx_bytes, tx_hash_hex)
        """
        signed = self._account.sign_transaction(tx_dict)
        return bytes(signed.raw_transaction), Web3.to_hex(signed.hash)

    @classmethod
    def from_private_key(cls, private_key: str) -> "EVMSigner":
        """
        Create signer from private key

        Args:
            private_key: Hex-encoded private key (with or without 0x prefix)

        Returns:
            EVMSigner instance

        Raises:
            SignerError: If the key is empty or malformed
        """
        if not private_key:
            raise SignerError.not_configured()

        # Ensure 0x prefix
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key

        try:
            account = Account.from_key(private_key)
        except (ValueError, TypeError) as e:
            # never echo the key itself
            raise SignerError.failed("invalid private key format", e) from None
        return cls(account)

    def __repr__(self) -> str:
        return f"EVMSigner(address={self.address})"


def create_evm_signer(private_key: Optional[str] = None) -> EVMSigner:
    """
    Create EVM signer from an explicit key or the PRIVATE_KEY setting

    Raises:
        SignerError: If no key is configured
    """
    if private_key is None:
        from ..config import config
        private_key = config.signer.private_key

    if not private_key:
        raise SignerError.not_configured()

    return EVMSigner.from_private_key(private_key)


def create_web3(rpc_url: str, timeout: float = 30) -> Web3:
    """
    Create Web3 instance for an HTTP RPC endpoint

    Args:
        rpc_url: RPC endpoint URL
        timeout: Request timeout in seconds

    Returns:
        Configured Web3 instance
    """
    if not rpc_url:
        raise ConfigurationError.missing("ALCHEMY_HTTP_TRANSPORT_URL")

    provider = HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": timeout},
    )
    return Web3(provider)
