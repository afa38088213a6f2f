# mychain_core/keymanager/identity.py

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

from bip_utils import (
    AtomAddrEncoder,
    Bip39MnemonicGenerator,
    Bip39MnemonicValidator,
    Bip39SeedGenerator,
    Bip39WordsNum,
    Bip44,
    Bip44Changes,
    Bip44Coins,
)

from ..constants import ADDRESS_PREFIX, COSMOS_COIN_TYPE, MNEMONIC_WORD_COUNT
from ..errors import IdentityError

logger = logging.getLogger(__name__)

_WORDS_NUM = {
    12: Bip39WordsNum.WORDS_NUM_12,
    15: Bip39WordsNum.WORDS_NUM_15,
    18: Bip39WordsNum.WORDS_NUM_18,
    21: Bip39WordsNum.WORDS_NUM_21,
    24: Bip39WordsNum.WORDS_NUM_24,
}


@dataclass(frozen=True)
class AccountData:
    """Public view of one derived account."""

    address: str
    pubkey: bytes
    algo: str = "secp256k1"
    hd_path: str = ""


@dataclass(frozen=True)
class Identity:
    """
    Signing key material plus its derived accounts.

    Private keys are keyed by address and kept out of repr so an identity
    can be logged without leaking them.
    """

    prefix: str
    accounts: Tuple[AccountData, ...]
    _private_keys: Dict[str, bytes] = field(default_factory=dict, repr=False, compare=False)

    def private_key_for(self, address: str) -> bytes:
        try:
            return self._private_keys[address]
        except KeyError:
            raise IdentityError(f"No key material for address {address}") from None


class KeyDerivation(ABC):
    """Key-derivation collaborator consumed by IdentityProvider."""

    @abstractmethod
    def derive_from_secret(self, secret_phrase: str, prefix: str) -> Identity:
        ...

    @abstractmethod
    def generate_secret(self, word_count: int, prefix: str) -> str:
        ...

    def list_accounts(self, identity: Identity) -> Sequence[AccountData]:
        return identity.accounts


class Bip39KeyDerivation(KeyDerivation):
    """
    BIP39 mnemonic / BIP44 secp256k1 derivation used by Cosmos SDK wallets.

    Derivation path: m/44'/118'/0'/0/{address_index}
    - 44: BIP44 standard
    - 118: Cosmos coin type
    - 0: account, 0: external chain
    Only address index 0 is derived; a single active account per identity.
    """

    COIN_TYPE = COSMOS_COIN_TYPE

    def __init__(self, passphrase: str = ""):
        self.passphrase = passphrase

    def derive_from_secret(self, secret_phrase: str, prefix: str) -> Identity:
        if not isinstance(secret_phrase, str) or not secret_phrase.strip():
            raise IdentityError("Secret phrase must be a non-empty string")
        mnemonic = " ".join(secret_phrase.split())

        if not Bip39MnemonicValidator().IsValid(mnemonic):
            raise IdentityError(
                "Malformed secret phrase: wrong word count, unknown word or bad checksum"
            )

        seed = Bip39SeedGenerator(mnemonic).Generate(self.passphrase)
        address_ctx = (
            Bip44.FromSeed(seed, Bip44Coins.COSMOS)
            .Purpose()
            .Coin()
            .Account(0)
            .Change(Bip44Changes.CHAIN_EXT)
            .AddressIndex(0)
        )
        pubkey = address_ctx.PublicKey().RawCompressed().ToBytes()
        address = AtomAddrEncoder.EncodeKey(pubkey, hrp=prefix)
        account = AccountData(
            address=address,
            pubkey=pubkey,
            hd_path=f"m/44'/{self.COIN_TYPE}'/0'/0/0",
        )
        private_key = address_ctx.PrivateKey().Raw().ToBytes()
        return Identity(
            prefix=prefix,
            accounts=(account,),
            _private_keys={address: private_key},
        )

    def generate_secret(self, word_count: int, prefix: str) -> str:
        if word_count not in _WORDS_NUM:
            raise IdentityError(f"Unsupported mnemonic word count: {word_count}")
        # Bip39MnemonicGenerator draws entropy from os.urandom
        return str(Bip39MnemonicGenerator().FromWordsNumber(_WORDS_NUM[word_count]))


class IdentityProvider:
    """Derives, generates and inspects signing identities."""

    def __init__(self, key_derivation: Optional[KeyDerivation] = None, prefix: str = ADDRESS_PREFIX):
        self.key_derivation = key_derivation or Bip39KeyDerivation()
        self.prefix = prefix

    def from_secret(self, secret_phrase: str, address_prefix: Optional[str] = None) -> Identity:
        """
        Deterministically derive an identity from a mnemonic.

        Args:
            secret_phrase: BIP39 mnemonic
            address_prefix: bech32 prefix, defaults to the chain prefix

        Returns:
            Identity whose first account is the active signer

        Raises:
            IdentityError: malformed phrase or nothing derivable
        """
        identity = self.key_derivation.derive_from_secret(
            secret_phrase, address_prefix or self.prefix
        )
        logger.info(f"Identity derived for {self.primary_address(identity)}")
        return identity

    def generate_secret(self, address_prefix: Optional[str] = None) -> str:
        return self.key_derivation.generate_secret(
            MNEMONIC_WORD_COUNT, address_prefix or self.prefix
        )

    def primary_address(self, identity: Identity) -> str:
        if identity is None:
            raise IdentityError("Identity required")
        accounts = self.key_derivation.list_accounts(identity)
        if not accounts:
            raise IdentityError("Identity has no derived accounts")
        return accounts[0].address
