"""
Transaction Assembler & Submitter

Builds the settlement transaction from a quote and a permit signature, signs
it locally and broadcasts it. Confirmation is not awaited.
"""

from __future__ import annotations

import logging
from typing import Optional

from web3 import Web3

from ..infra.chain_client import ChainClient
from ..types.quote import Quote, AssembledTransaction
from ..errors import SubmissionError
from .permit import append_signature

logger = logging.getLogger(__name__)


class TransactionSubmitter:
    """
    Usage:
        submitter = TransactionSubmitter(chain)
        tx_hash = submitter.submit(quote, signature)
    """

    def __init__(self, chain: ChainClient):
        self._chain = chain

    def assemble(self, quote: Quote, signature: bytes) -> AssembledTransaction:
        """
        Merge the signature into the quote's call data and fill the remaining
        transaction fields. The nonce is read from the network on every call.

        Raises:
            SubmissionError: If required quote fields are missing or a network
                read fails
        """
        tx = quote.transaction
        if tx is None:
            raise SubmissionError.missing_field("transaction")
        if not tx.data:
            raise SubmissionError.missing_field("transaction.data")
        if not tx.to:
            raise SubmissionError.missing_field("transaction.to")

        data = append_signature(tx.data, signature)
        to = Web3.to_checksum_address(tx.to)
        value = tx.value or 0

        try:
            nonce = self._chain.get_nonce()
        except Exception as e:
            raise SubmissionError.chain_read_failed("nonce", e) from e

        gas_price = tx.gas_price
        if not gas_price:
            try:
                gas_price = self._chain.gas_price()
            except Exception as e:
                raise SubmissionError.chain_read_failed("gas price", e) from e
            logger.warning(f"Quote has no gasPrice, using network gas price {gas_price}")

        gas = tx.gas
        if not gas:
            try:
                gas = self._chain.estimate_gas({"to": to, "data": data, "value": value})
            except Exception as e:
                raise SubmissionError.chain_read_failed("gas estimate", e) from e
            logger.warning(f"Quote has no gas limit, using network estimate {gas}")

        return AssembledTransaction(
            to=to,
            data=data,
            value=value,
            gas=gas,
            gas_price=gas_price,
            nonce=nonce,
            chain_id=self._chain.chain_id,
        )

    def submit(self, quote: Quote, signature: Optional[bytes]) -> Optional[str]:
        """
        Assemble, sign and broadcast the settlement transaction.

        Returns:
            Transaction hash, or None when the quote has no Permit2 payload or
            no call data (nothing is signed or sent)

        Raises:
            SubmissionError: On assembly, signing or broadcast failure
        """
        if not quote.eip712 or not quote.call_data or not signature:
            logger.info("Quote has no Permit2 payload or call data, nothing to submit")
            return None

        assembled = self.assemble(quote, signature)

        try:
            raw_tx, _ = self._chain.sign_transaction(assembled.to_tx_dict())
        except Exception as e:
            raise SubmissionError.sign_failed(e) from e

        try:
            tx_hash = self._chain.send_raw_transaction(raw_tx)
        except Exception as e:
            raise SubmissionError.send_failed(e) from e

        logger.info(f"Transaction hash: {tx_hash}")
        return tx_hash
