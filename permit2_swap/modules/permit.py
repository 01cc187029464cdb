"""
Permit Signature Builder

Signs the aggregator's Permit2 EIP-712 payload and encodes the signature the
way the settlement contract reads it from the end of the call data:

    call_data || uint256(len(signature)) || signature
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Union

from eth_abi import encode
from hexbytes import HexBytes

from ..infra.chain_client import ChainClient
from ..errors import SignerError

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH_SIZE = 32


def encode_signature_length(signature: bytes) -> bytes:
    """Signature byte length as a 32-byte big-endian unsigned integer"""
    return encode(["uint256"], [len(signature)])


def append_signature(call_data: Union[str, bytes], signature: bytes) -> bytes:
    """
    Append a length-prefixed signature to transaction call data.

    Args:
        call_data: Original call data (hex string or bytes)
        signature: Raw signature bytes

    Returns:
        call_data + 32-byte length + signature
    """
    return bytes(HexBytes(call_data)) + encode_signature_length(signature) + bytes(signature)


class PermitSigner:
    """Produces Permit2 signatures for aggregator quotes"""

    def __init__(self, chain: ChainClient):
        self._chain = chain

    def sign_permit(self, eip712: Dict[str, Any]) -> bytes:
        """
        Sign the typed-data payload exactly as received.

        Args:
            eip712: permit2.eip712 from the quote

        Returns:
            Signature bytes

        Raises:
            SignerError: If the payload is empty or the account cannot sign it
        """
        if not eip712:
            raise SignerError.failed("empty EIP-712 payload")

        signature = self._chain.sign_typed_data(eip712)
        if not signature:
            raise SignerError.failed("signer returned an empty signature")

        logger.debug(f"Signed {eip712.get('primaryType', 'typed data')} ({len(signature)} bytes)")
        return signature
