"""
Exception definitions for the Permit2 swap pipeline
"""

from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """
    Unified error codes for swap pipeline stages

    1xxx - Quote acquisition errors
    2xxx - Allowance errors
    3xxx - Signer errors
    4xxx - Submission errors
    9xxx - Configuration errors
    """
    # Quote acquisition
    QUOTE_REQUEST_FAILED = "1001"
    QUOTE_TIMEOUT = "1002"
    QUOTE_HTTP_ERROR = "1003"
    QUOTE_INVALID_RESPONSE = "1004"

    # Allowance
    ALLOWANCE_SIMULATION_FAILED = "2001"
    ALLOWANCE_SEND_FAILED = "2002"
    ALLOWANCE_REVERTED = "2003"
    ALLOWANCE_TIMEOUT = "2004"
    ALLOWANCE_RECEIPT_FAILED = "2005"

    # Signer
    SIGNER_NOT_CONFIGURED = "3001"
    SIGNER_FAILED = "3002"

    # Submission
    TX_MISSING_FIELDS = "4001"
    TX_SIGN_FAILED = "4002"
    TX_SEND_FAILED = "4003"
    TX_CHAIN_READ_FAILED = "4004"

    # Configuration
    CONFIG_INVALID = "9001"
    CONFIG_MISSING = "9002"


class SwapError(Exception):
    """
    Base exception for all swap pipeline errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        recoverable: Whether a fresh attempt might succeed
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        recoverable: bool = False,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.recoverable = recoverable
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class QuoteUnavailable(SwapError):
    """
    Aggregator could not produce a price or quote

    Raised when:
    - The aggregator is unreachable or times out
    - The aggregator answers with a non-2xx status
    - The response body is not JSON
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.QUOTE_REQUEST_FAILED,
        endpoint: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=code != ErrorCode.QUOTE_HTTP_ERROR or (status_code or 0) >= 500,
            original_error=original_error,
            details={"endpoint": endpoint, "status_code": status_code},
        )
        self.endpoint = endpoint
        self.status_code = status_code

    @classmethod
    def request_failed(cls, endpoint: str, error: Exception) -> "QuoteUnavailable":
        return cls(
            f"Aggregator request to {endpoint} failed: {error}",
            ErrorCode.QUOTE_REQUEST_FAILED,
            endpoint=endpoint,
            original_error=error,
        )

    @classmethod
    def timeout(cls, endpoint: str, timeout_seconds: float) -> "QuoteUnavailable":
        return cls(
            f"Aggregator request to {endpoint} timed out after {timeout_seconds}s",
            ErrorCode.QUOTE_TIMEOUT,
            endpoint=endpoint,
        )

    @classmethod
    def http_error(cls, endpoint: str, status_code: int, reason: str) -> "QuoteUnavailable":
        return cls(
            f"Aggregator returned HTTP {status_code} for {endpoint}: {reason}",
            ErrorCode.QUOTE_HTTP_ERROR,
            endpoint=endpoint,
            status_code=status_code,
        )

    @classmethod
    def invalid_response(cls, endpoint: str, reason: str) -> "QuoteUnavailable":
        return cls(
            f"Aggregator response from {endpoint} is invalid: {reason}",
            ErrorCode.QUOTE_INVALID_RESPONSE,
            endpoint=endpoint,
        )


class AllowanceError(SwapError):
    """
    Granting the spender allowance failed

    Raised when the approval simulation reverts, the approval cannot be sent,
    reverts on-chain, or is not mined within the receipt timeout.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ALLOWANCE_SEND_FAILED,
        token: Optional[str] = None,
        spender: Optional[str] = None,
        tx_hash: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            code,
            recoverable=code in (ErrorCode.ALLOWANCE_TIMEOUT, ErrorCode.ALLOWANCE_RECEIPT_FAILED),
            original_error=original_error,
            details={"token": token, "spender": spender, "tx_hash": tx_hash},
        )
        self.token = token
        self.spender = spender
        self.tx_hash = tx_hash

    @classmethod
    def simulation_failed(cls, token: str, spender: str, error: Exception) -> "AllowanceError":
        return cls(
            f"Approval simulation failed for {spender} on {token}: {error}",
            ErrorCode.ALLOWANCE_SIMULATION_FAILED,
            token=token,
            spender=spender,
            original_error=error,
        )

    @classmethod
    def send_failed(cls, token: str, spender: str, error: Exception) -> "AllowanceError":
        return cls(
            f"Failed to send approval for {spender} on {token}: {error}",
            ErrorCode.ALLOWANCE_SEND_FAILED,
            token=token,
            spender=spender,
            original_error=error,
        )

    @classmethod
    def reverted(cls, token: str, spender: str, tx_hash: str) -> "AllowanceError":
        return cls(
            f"Approval transaction {tx_hash} reverted",
            ErrorCode.ALLOWANCE_REVERTED,
            token=token,
            spender=spender,
            tx_hash=tx_hash,
        )

    @classmethod
    def timeout(cls, token: str, spender: str, tx_hash: str, timeout_seconds: float) -> "AllowanceError":
        return cls(
            f"Approval transaction {tx_hash} not mined after {timeout_seconds}s",
            ErrorCode.ALLOWANCE_TIMEOUT,
            token=token,
            spender=spender,
            tx_hash=tx_hash,
        )

    @classmethod
    def receipt_failed(cls, token: str, spender: str, tx_hash: str, error: Exception) -> "AllowanceError":
        return cls(
            f"Failed to read receipt of approval transaction {tx_hash}: {error}",
            ErrorCode.ALLOWANCE_RECEIPT_FAILED,
            token=token,
            spender=spender,
            tx_hash=tx_hash,
            original_error=error,
        )


class SignerError(SwapError):
    """
    Signing-related errors

    Raised when:
    - No private key configured
    - The account rejects or cannot sign a payload
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.SIGNER_FAILED,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, code, recoverable=False, original_error=original_error)

    @classmethod
    def not_configured(cls) -> "SignerError":
        return cls(
            "No signer configured. Set PRIVATE_KEY.",
            ErrorCode.SIGNER_NOT_CONFIGURED,
        )

    @classmethod
    def failed(cls, reason: str, error: Optional[Exception] = None) -> "SignerError":
        return cls(f"Signing failed: {reason}", ErrorCode.SIGNER_FAILED, original_error=error)


class SubmissionError(SwapError):
    """
    Transaction assembly or broadcast errors

    Raised when:
    - The quote lacks fields needed to build the transaction
    - The nonce or gas fields cannot be read from the network
    - Local signing of the transaction fails
    - The node rejects the raw transaction
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TX_SEND_FAILED,
        original_error: Optional[Exception] = None,
        recoverable: bool = False,
    ):
        super().__init__(message, code, recoverable=recoverable, original_error=original_error)

    @classmethod
    def missing_field(cls, field_name: str) -> "SubmissionError":
        return cls(
            f"Quote transaction is missing required field: {field_name}",
            ErrorCode.TX_MISSING_FIELDS,
        )

    @classmethod
    def chain_read_failed(cls, what: str, error: Exception) -> "SubmissionError":
        return cls(
            f"Failed to read {what} from the network: {error}",
            ErrorCode.TX_CHAIN_READ_FAILED,
            original_error=error,
            recoverable=True,
        )

    @classmethod
    def sign_failed(cls, error: Exception) -> "SubmissionError":
        return cls(
            f"Failed to sign transaction: {error}",
            ErrorCode.TX_SIGN_FAILED,
            original_error=error,
        )

    @classmethod
    def send_failed(cls, error: Exception) -> "SubmissionError":
        reason = str(error)
        # network-level failures may succeed on a fresh attempt
        recoverable = "timeout" in reason.lower() or "connection" in reason.lower()
        return cls(
            f"Failed to broadcast transaction: {reason}",
            ErrorCode.TX_SEND_FAILED,
            original_error=error,
            recoverable=recoverable,
        )


class ConfigurationError(SwapError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code, recoverable=False)

    @classmethod
    def missing(cls, param: str, hint: Optional[str] = None) -> "ConfigurationError":
        message = f"Missing required configuration: {param}"
        if hint:
            message = f"{message}. {hint}"
        return cls(message, ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)
