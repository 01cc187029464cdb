"""
Allowance Manager

Grants the aggregator's spender an unlimited ERC-20 allowance on the sell
token when the quote reports that one is needed.
"""

from __future__ import annotations

import logging
from typing import Optional

from web3.exceptions import TimeExhausted

from ..infra.chain_client import ChainClient
from ..types.quote import PriceResult
from ..errors import AllowanceError

logger = logging.getLogger(__name__)

MAX_UINT256 = 2**256 - 1


class AllowanceManager:
    """
    Ensures the spender named by the aggregator may pull the sell token.

    Sufficiency is decided by the aggregator (issues.allowance), not by an
    on-chain allowance read.
    """

    def __init__(self, chain: ChainClient, receipt_timeout: float = 120.0):
        self._chain = chain
        self._receipt_timeout = receipt_timeout

    def ensure_for_quote(self, quote: PriceResult, token: str) -> Optional[str]:
        """
        Approve the spender from quote.issues.allowance, if any.

        Returns:
            Approval tx hash, or None when no approval was needed
        """
        issue = quote.issues.allowance
        if issue is None:
            logger.info(f"Token {token} already approved for the aggregator spender")
            return None
        return self.ensure_allowance(token, issue.spender)

    def ensure_allowance(self, token: str, spender: str) -> str:
        """
        Grant spender an unlimited allowance on token and wait until mined.

        Args:
            token: Sell token address
            spender: Address that needs the allowance (Permit2 contract)

        Returns:
            Hash of the mined approval transaction

        Raises:
            AllowanceError: If the approval would revert, cannot be sent,
                reverts on-chain, or is not mined in time
        """
        try:
            self._chain.simulate_approve(token, spender, MAX_UINT256)
        except Exception as e:
            raise AllowanceError.simulation_failed(token, spender, e) from e

        logger.info(f"Approving {spender} to spend {token}...")

        try:
            tx_hash = self._chain.send_approve(token, spender, MAX_UINT256)
        except Exception as e:
            raise AllowanceError.send_failed(token, spender, e) from e

        try:
            receipt = self._chain.wait_for_receipt(tx_hash, timeout=self._receipt_timeout)
        except TimeExhausted as e:
            raise AllowanceError.timeout(token, spender, tx_hash, self._receipt_timeout) from e
        except Exception as e:
            raise AllowanceError.receipt_failed(token, spender, tx_hash, e) from e

        if receipt.get("status") != 1:
            raise AllowanceError.reverted(token, spender, tx_hash)

        logger.info(f"Approved {spender} to spend {token}: {tx_hash} (block {receipt.get('blockNumber')})")
        return tx_hash
