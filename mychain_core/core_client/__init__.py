"""
Connection layer for the MyChain client core.
"""

from .connection import (
    ConnectionManager,
    ConnectionState,
    Disconnected,
    ReadOnly,
    Signing,
)
from .transport import NodeTransport, TxEncoder

__all__ = [
    "ConnectionManager",
    "ConnectionState",
    "Disconnected",
    "ReadOnly",
    "Signing",
    "NodeTransport",
    "TxEncoder",
]
