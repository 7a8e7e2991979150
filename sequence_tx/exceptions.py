"""
Exceptions for the sequence-tx package.

Every failure raised by this package carries an ``ErrorKind`` so callers can
branch on the category instead of matching message text.
"""
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """
    Categories of failure.

    Only ``DIRECTORY`` is recoverable; every other kind terminates the run.
    """
    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    NETWORK = "NETWORK"
    ENCODING = "ENCODING"
    AFFORDABILITY = "AFFORDABILITY"
    TIMEOUT = "TIMEOUT"
    DEPLOYMENT = "DEPLOYMENT"
    DIRECTORY = "DIRECTORY"


class SequenceTxError(Exception):
    """Base exception for all sequence-tx errors."""

    kind: ErrorKind = ErrorKind.CONFIG

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class ConfigError(SequenceTxError):
    """Raised when the configuration file is missing, unreadable or incomplete."""
    kind = ErrorKind.CONFIG


class ValidationFailedError(SequenceTxError):
    """Raised when a key or address fails validation."""
    kind = ErrorKind.VALIDATION


class NetworkError(SequenceTxError):
    """Raised when a node, relayer or wallet SDK call fails."""
    kind = ErrorKind.NETWORK


class EncodingError(SequenceTxError):
    """Raised when ABI packing or unpacking fails."""
    kind = ErrorKind.ENCODING


class AffordabilityError(SequenceTxError):
    """Raised when the wallet cannot pay any of the offered relayer fees."""
    kind = ErrorKind.AFFORDABILITY


class ReceiptTimeoutError(SequenceTxError):
    """Raised when a receipt does not arrive before the deadline."""
    kind = ErrorKind.TIMEOUT


class DeploymentError(SequenceTxError):
    """Raised when the smart wallet could not be deployed."""
    kind = ErrorKind.DEPLOYMENT


class DirectoryError(SequenceTxError):
    """Raised when publishing the wallet configuration to the directory fails."""
    kind = ErrorKind.DIRECTORY
