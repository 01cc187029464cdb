"""
Result type definitions for swap runs
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TxStatus(Enum):
    """Outcome of a swap run"""
    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"  # Broadcast, confirmation not awaited
    SKIPPED = "skipped"  # No transaction was needed or applicable


@dataclass
class SwapResult:
    """
    Swap pipeline result

    Attributes:
        status: Run status
        tx_hash: Hash of the broadcast swap transaction
        approval_tx_hash: Hash of the allowance transaction, if one was mined
        explorer_url: Block explorer link for tx_hash
        error: Error message if failed or reason if skipped
        error_code: Error code for programmatic handling
        recoverable: Whether a fresh attempt might succeed
    """
    status: TxStatus
    tx_hash: Optional[str] = None
    approval_tx_hash: Optional[str] = None
    explorer_url: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    recoverable: bool = False

    @property
    def is_success(self) -> bool:
        return self.status in (TxStatus.SUCCESS, TxStatus.PENDING)

    @property
    def is_failed(self) -> bool:
        return self.status == TxStatus.FAILED

    @property
    def is_skipped(self) -> bool:
        return self.status == TxStatus.SKIPPED

    @classmethod
    def pending(cls, tx_hash: str, **kwargs) -> "SwapResult":
        """Create result for a broadcast transaction"""
        return cls(status=TxStatus.PENDING, tx_hash=tx_hash, **kwargs)

    @classmethod
    def failed(cls, error: str, **kwargs) -> "SwapResult":
        """Create failed result"""
        return cls(status=TxStatus.FAILED, error=error, **kwargs)

    @classmethod
    def skipped(cls, reason: str = "No action needed", **kwargs) -> "SwapResult":
        """Create skipped result (no transaction was submitted)"""
        return cls(status=TxStatus.SKIPPED, error=reason, **kwargs)

    def __str__(self) -> str:
        if self.is_success:
            return f"SwapResult({self.status.value}, {self.tx_hash})"
        return f"SwapResult({self.status.value}, error={self.error})"
