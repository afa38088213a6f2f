"""
Error kinds raised by the MyChain client core.

Every failing public operation raises one of the four concrete classes
below. Callers can branch on ``err.kind`` instead of parsing messages.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONNECTION = "connection"
    IDENTITY = "identity"
    VALIDATION = "validation"
    TRANSACTION = "transaction"


class MyChainError(Exception):
    """Base class for all client-core errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ChainConnectionError(MyChainError):
    """Transport unreachable, handshake failure, or no usable connection."""

    kind = ErrorKind.CONNECTION


class IdentityError(MyChainError):
    """Malformed secret phrase, no derivable account, or missing identity."""

    kind = ErrorKind.IDENTITY


class ValidationError(MyChainError):
    """Caller input rejected before anything is sent to the node."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class TransactionError(MyChainError):
    """The chain answered the broadcast with a non-zero status code."""

    kind = ErrorKind.TRANSACTION

    def __init__(self, code: int, raw_log: str, codespace: str = ""):
        super().__init__(f"Transaction failed with code {code}: {raw_log}")
        self.code = code
        self.raw_log = raw_log
        self.codespace = codespace
