"""
Service layer: address checks, message building, execution and queries.
"""

from .address import AddressValidator, is_valid_address
from .executor import TransactionExecutor
from .messages import (
    ChainMessageEnvelope,
    CreateUser,
    MintTokens,
    RegisterMiner,
    TransactionBuilder,
    TransferTokens,
)
from .query_service import ChainReader

__all__ = [
    "AddressValidator",
    "is_valid_address",
    "TransactionExecutor",
    "ChainMessageEnvelope",
    "CreateUser",
    "MintTokens",
    "RegisterMiner",
    "TransactionBuilder",
    "TransferTokens",
    "ChainReader",
]
