"""
MyChain client core.

Connects to a MyChain node, manages the signing identity, builds and
broadcasts the mychain module's messages and reads chain state.
"""

from .client import MyChainClient, WalletUtils, generate_mnemonic
from .core_client import ConnectionManager, Disconnected, ReadOnly, Signing
from .errors import (
    ChainConnectionError,
    ErrorKind,
    IdentityError,
    MyChainError,
    TransactionError,
    ValidationError,
)
from .keymanager import Identity, IdentityProvider
from .service import (
    AddressValidator,
    ChainReader,
    TransactionBuilder,
    TransactionExecutor,
    is_valid_address,
)
from .types import Amount, BroadcastResult, FeeMode, FeePolicy, GasPrice

__version__ = "0.1.0"

__all__ = [
    "MyChainClient",
    "WalletUtils",
    "generate_mnemonic",
    "ConnectionManager",
    "Disconnected",
    "ReadOnly",
    "Signing",
    "ChainConnectionError",
    "ErrorKind",
    "IdentityError",
    "MyChainError",
    "TransactionError",
    "ValidationError",
    "Identity",
    "IdentityProvider",
    "AddressValidator",
    "ChainReader",
    "TransactionBuilder",
    "TransactionExecutor",
    "is_valid_address",
    "Amount",
    "BroadcastResult",
    "FeeMode",
    "FeePolicy",
    "GasPrice",
]
