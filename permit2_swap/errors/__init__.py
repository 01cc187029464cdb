"""
Error definitions for the Permit2 swap pipeline
"""

from .exceptions import (
    ErrorCode,
    SwapError,
    QuoteUnavailable,
    AllowanceError,
    SignerError,
    SubmissionError,
    ConfigurationError,
)

__all__ = [
    "ErrorCode",
    "SwapError",
    "QuoteUnavailable",
    "AllowanceError",
    "SignerError",
    "SubmissionError",
    "ConfigurationError",
]
