"""
Value types shared by the transaction and query paths.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from .errors import ValidationError

_UINT_REGEX = re.compile(r"[0-9]+")
_DENOM_REGEX = re.compile(r"[a-zA-Z][a-zA-Z0-9/:._-]{1,127}")
_GAS_PRICE_REGEX = re.compile(r"([0-9]+(?:\.[0-9]+)?)([a-zA-Z][a-zA-Z0-9/:._-]{1,127})")


def is_uint_string(value) -> bool:
    """True for non-empty strings made only of decimal digits."""
    return isinstance(value, str) and bool(_UINT_REGEX.fullmatch(value))


def is_valid_denom(value) -> bool:
    return isinstance(value, str) and bool(_DENOM_REGEX.fullmatch(value))


@dataclass(frozen=True)
class Amount:
    """
    A token amount. ``value`` is a decimal integer string so large balances
    never pass through floating point.
    """

    value: str
    denom: str

    def __post_init__(self):
        if not is_uint_string(self.value):
            raise ValidationError(
                f"Amount must be a non-negative integer string, got {self.value!r}",
                field="amount",
            )
        if not is_valid_denom(self.denom):
            raise ValidationError(f"Invalid denom {self.denom!r}", field="denom")

    def to_coin(self) -> dict:
        return {"denom": self.denom, "amount": self.value}

    def __str__(self) -> str:
        return f"{self.value}{self.denom}"


@dataclass(frozen=True)
class BroadcastResult:
    """Synchronous broadcast acknowledgment returned by the node."""

    status_code: int
    transaction_hash: str
    raw_log: str = ""
    codespace: str = ""

    @property
    def is_success(self) -> bool:
        return self.status_code == 0


@dataclass(frozen=True)
class GasPrice:
    amount: Decimal
    denom: str

    @classmethod
    def from_string(cls, gas_price: str) -> "GasPrice":
        """Parse strings such as ``"0.1umychain"``."""
        match = _GAS_PRICE_REGEX.fullmatch(gas_price.strip()) if isinstance(gas_price, str) else None
        if not match:
            raise ValidationError(f"Invalid gas price {gas_price!r}", field="gas_price")
        try:
            amount = Decimal(match.group(1))
        except InvalidOperation as e:
            raise ValidationError(f"Invalid gas price {gas_price!r}", field="gas_price") from e
        return cls(amount=amount, denom=match.group(2))

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


class FeeMode(str, Enum):
    AUTO = "auto"
    FIXED = "fixed"


@dataclass(frozen=True)
class FeePolicy:
    """
    How a broadcast pays for itself and what memo it carries.

    ``AUTO`` lets the signing transport simulate gas and price it with the
    connection's gas price. ``FIXED`` pays exactly ``fixed_fee``.
    """

    fee_mode: FeeMode = FeeMode.AUTO
    fixed_fee: Optional[Amount] = None
    memo: str = ""

    def __post_init__(self):
        if self.fee_mode == FeeMode.FIXED and self.fixed_fee is None:
            raise ValidationError("Fixed fee mode requires fixed_fee", field="fixed_fee")
        if self.fee_mode == FeeMode.AUTO and self.fixed_fee is not None:
            raise ValidationError("fixed_fee is only allowed in fixed fee mode", field="fixed_fee")
        if not isinstance(self.memo, str):
            raise ValidationError("Memo must be a string", field="memo")

    def with_memo(self, memo: str) -> "FeePolicy":
        return FeePolicy(fee_mode=self.fee_mode, fixed_fee=self.fixed_fee, memo=memo)
