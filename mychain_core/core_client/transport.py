"""
Collaborator interfaces consumed by the client core.

A ``NodeTransport`` owns the wire protocol to a node; handles it returns
are opaque to the core. A ``TxEncoder`` turns envelopes into signed
transaction bytes (protobuf encoding, account sequence lookup and gas
simulation all live behind it).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from ..keymanager.identity import Identity
from ..types import Amount, BroadcastResult, FeePolicy, GasPrice


class NodeTransport(ABC):
    @abstractmethod
    async def open_read_only(self, endpoint: str) -> Any:
        """Open a query-only handle, raising ChainConnectionError on failure."""

    @abstractmethod
    async def open_signing(self, endpoint: str, identity: Identity, gas_price: GasPrice) -> Any:
        """Open a handle able to sign with ``identity``."""

    @abstractmethod
    async def close(self, handle: Any) -> None:
        ...

    @abstractmethod
    async def get_height(self, handle: Any) -> int:
        ...

    @abstractmethod
    async def get_balance(self, handle: Any, address: str, denom: str) -> Optional[Amount]:
        """Return the holding of ``denom``; ``None`` or a zero amount when empty."""

    @abstractmethod
    async def sign_and_broadcast(
        self,
        handle: Any,
        sender_address: str,
        envelopes: Sequence[Any],
        fee_policy: FeePolicy,
        memo: str,
    ) -> BroadcastResult:
        ...


class TxEncoder(ABC):
    @abstractmethod
    async def encode(
        self,
        identity: Identity,
        sender_address: str,
        envelopes: Sequence[Any],
        fee_policy: FeePolicy,
        memo: str,
        *,
        chain_id: str,
        gas_price: GasPrice,
    ) -> bytes:
        """Return signed, serialized transaction bytes ready for broadcast."""
