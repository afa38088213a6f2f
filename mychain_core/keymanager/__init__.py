"""
Key management for MyChain: mnemonic generation and identity derivation.
"""

from .identity import (
    AccountData,
    Bip39KeyDerivation,
    Identity,
    IdentityProvider,
    KeyDerivation,
)

__all__ = [
    "AccountData",
    "Bip39KeyDerivation",
    "Identity",
    "IdentityProvider",
    "KeyDerivation",
]
