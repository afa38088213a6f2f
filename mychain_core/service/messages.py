"""
Chain messages for the mychain module.

Each domain action is its own frozen dataclass carrying typed fields.
Construction validates the fields, so an instance that exists is always
well formed; ``TransactionBuilder`` turns it into the envelope that the
signing transport consumes.
"""

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ..constants import NATIVE_DENOM, TYPE_URL_PREFIX
from ..errors import ValidationError
from ..types import Amount
from .address import is_valid_address

logger = logging.getLogger(__name__)

# Plain decimal as accepted by the chain's sdk.Dec parser
_DECIMAL_REGEX = re.compile(r"[0-9]+(?:\.[0-9]+)?")


def _require_address(value, field_name: str) -> None:
    if not is_valid_address(value):
        raise ValidationError(f"Invalid {field_name} address: {value!r}", field=field_name)


def _require_text(value, field_name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} must be a non-empty string", field=field_name)


def _require_commission(value) -> None:
    _require_text(value, "commission")
    if not _DECIMAL_REGEX.fullmatch(value):
        raise ValidationError(f"Invalid commission rate: {value!r}", field="commission")
    rate = Decimal(value)
    if rate > 1:
        raise ValidationError(
            f"Commission must be a decimal between 0 and 1, got {value!r}",
            field="commission",
        )


def make_amount(value: str, denom: Optional[str] = None) -> Amount:
    """Build an Amount, defaulting to the native denom."""
    return Amount(value=value, denom=denom or NATIVE_DENOM)


@dataclass(frozen=True)
class ChainMessageEnvelope:
    """A message ready to be signed: a type url plus its JSON payload."""

    type_url: str
    value: Mapping[str, Any]

    def __post_init__(self):
        # Freeze the payload so nothing downstream mutates a built envelope
        object.__setattr__(self, "value", MappingProxyType(dict(self.value)))

    @property
    def message_type(self) -> str:
        return self.type_url[len(TYPE_URL_PREFIX):] if self.type_url.startswith(TYPE_URL_PREFIX) else self.type_url

    def to_dict(self) -> dict:
        return {"typeUrl": self.type_url, "value": dict(self.value)}


@dataclass(frozen=True)
class CreateUser:
    creator: str
    name: str
    email: str

    MSG_TYPE = "MsgCreateUser"
    DEFAULT_MEMO = "Create new user"

    def __post_init__(self):
        _require_address(self.creator, "creator")
        _require_text(self.name, "name")
        _require_text(self.email, "email")

    @property
    def signer(self) -> str:
        return self.creator

    def payload(self) -> dict:
        return {"creator": self.creator, "name": self.name, "email": self.email}


@dataclass(frozen=True)
class TransferTokens:
    sender: str
    receiver: str
    amount: Amount

    MSG_TYPE = "MsgTransferTokens"
    DEFAULT_MEMO = "Transfer tokens"

    def __post_init__(self):
        _require_address(self.sender, "sender")
        _require_address(self.receiver, "receiver")
        if not isinstance(self.amount, Amount):
            raise ValidationError("amount must be an Amount", field="amount")

    @property
    def signer(self) -> str:
        return self.sender

    def payload(self) -> dict:
        return {
            "sender": self.sender,
            "receiver": self.receiver,
            "amount": [self.amount.to_coin()],
        }


@dataclass(frozen=True)
class MintTokens:
    minter: str
    amount: Amount

    MSG_TYPE = "MsgMintTokens"
    DEFAULT_MEMO = "Mint tokens"

    def __post_init__(self):
        _require_address(self.minter, "minter")
        if not isinstance(self.amount, Amount):
            raise ValidationError("amount must be an Amount", field="amount")

    @property
    def signer(self) -> str:
        return self.minter

    def payload(self) -> dict:
        return {"minter": self.minter, "amount": [self.amount.to_coin()]}


@dataclass(frozen=True)
class RegisterMiner:
    miner: str
    description: str
    commission: str

    MSG_TYPE = "MsgRegisterMiner"
    DEFAULT_MEMO = "Register as miner"

    def __post_init__(self):
        _require_address(self.miner, "miner")
        _require_text(self.description, "description")
        _require_commission(self.commission)

    @property
    def signer(self) -> str:
        return self.miner

    def payload(self) -> dict:
        return {
            "miner": self.miner,
            "description": self.description,
            "commission": self.commission,
        }


ChainAction = Union[CreateUser, TransferTokens, MintTokens, RegisterMiner]

MESSAGE_TYPES = {cls.MSG_TYPE: cls for cls in (CreateUser, TransferTokens, MintTokens, RegisterMiner)}


def type_url_for(msg_type: str) -> str:
    return f"{TYPE_URL_PREFIX}{msg_type}"


class TransactionBuilder:
    """
    Maps validated domain actions to chain message envelopes.

    Pure: no network access and no shared state, so one builder can be
    reused freely.
    """

    def build(self, action: ChainAction) -> ChainMessageEnvelope:
        if not isinstance(action, tuple(MESSAGE_TYPES.values())):
            raise ValidationError(f"Unsupported action: {type(action).__name__}")
        envelope = ChainMessageEnvelope(
            type_url=type_url_for(action.MSG_TYPE), value=action.payload()
        )
        logger.debug(f"Built {action.MSG_TYPE} envelope for {action.signer}")
        return envelope

    def create_user(self, creator: str, name: str, email: str) -> ChainMessageEnvelope:
        return self.build(CreateUser(creator=creator, name=name, email=email))

    def transfer_tokens(
        self, sender: str, receiver: str, amount: str, denom: Optional[str] = None
    ) -> ChainMessageEnvelope:
        return self.build(
            TransferTokens(sender=sender, receiver=receiver, amount=make_amount(amount, denom))
        )

    def mint_tokens(self, minter: str, amount: str, denom: Optional[str] = None) -> ChainMessageEnvelope:
        return self.build(MintTokens(minter=minter, amount=make_amount(amount, denom)))

    def register_miner(self, miner: str, description: str, commission: str) -> ChainMessageEnvelope:
        return self.build(
            RegisterMiner(miner=miner, description=description, commission=commission)
        )
