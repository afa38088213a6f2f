"""
Connection lifecycle for a single MyChain client.

The connection is one immutable state value: ``Disconnected``,
``ReadOnly`` or ``Signing``. Handles and identity only exist inside the
state that owns them, and a transition swaps the whole value under one
lock, so no caller ever sees a signing handle without its identity.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple, Union

from ..constants import DEFAULT_GAS_PRICE
from ..errors import ChainConnectionError, IdentityError
from ..keymanager.identity import Identity, IdentityProvider
from ..types import GasPrice
from .transport import NodeTransport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Disconnected:
    name = "Disconnected"


@dataclass(frozen=True)
class ReadOnly:
    endpoint: str
    read_handle: Any = field(repr=False)

    name = "ReadOnly"


@dataclass(frozen=True)
class Signing:
    endpoint: str
    read_handle: Any = field(repr=False)
    signing_handle: Any = field(repr=False)
    identity: Identity = field(repr=False)
    address: str = ""
    gas_price: Optional[GasPrice] = None

    name = "Signing"


ConnectionState = Union[Disconnected, ReadOnly, Signing]

DISCONNECTED = Disconnected()


def _handles_of(state: ConnectionState) -> Tuple[Any, ...]:
    if isinstance(state, Signing):
        return (state.signing_handle, state.read_handle)
    if isinstance(state, ReadOnly):
        return (state.read_handle,)
    return ()


class ConnectionManager:
    """Owns the read-only and signing handles of one client instance."""

    def __init__(
        self,
        transport: NodeTransport,
        identity_provider: Optional[IdentityProvider] = None,
        gas_price: Optional[GasPrice] = None,
    ):
        self.transport = transport
        self.identity_provider = identity_provider or IdentityProvider()
        self.gas_price = gas_price or GasPrice.from_string(DEFAULT_GAS_PRICE)
        self._state: ConnectionState = DISCONNECTED
        self._state_lock = threading.Lock()

    def current_state(self) -> ConnectionState:
        return self._state

    def _swap(self, new_state: ConnectionState) -> ConnectionState:
        with self._state_lock:
            old_state, self._state = self._state, new_state
        logger.debug(f"Connection state {old_state.name} -> {new_state.name}")
        return old_state

    async def _close_quietly(self, handles) -> None:
        for handle in handles:
            try:
                await self.transport.close(handle)
            except Exception as e:
                logger.warning(f"Error while closing connection handle: {e}")

    async def connect(self, rpc_endpoint: str) -> ReadOnly:
        """
        Open a read-only connection.

        Any previous connection is released once the new handle is open.
        On failure the current state is left untouched.

        Raises:
            ChainConnectionError: endpoint unreachable or handshake rejected
        """
        if not isinstance(rpc_endpoint, str) or not rpc_endpoint:
            raise ChainConnectionError("RPC endpoint is required")
        read_handle = await self.transport.open_read_only(rpc_endpoint)
        new_state = ReadOnly(endpoint=rpc_endpoint, read_handle=read_handle)
        old_state = self._swap(new_state)
        await self._close_quietly(_handles_of(old_state))
        logger.info(f"Connected to MyChain at {rpc_endpoint}")
        return new_state

    async def connect_with_identity(self, rpc_endpoint: str, identity: Identity) -> Signing:
        """
        Open a signing-capable connection bound to ``identity``.

        An existing read-only handle to the same endpoint is reused;
        otherwise a fresh one is opened alongside the signing handle.

        Raises:
            IdentityError: identity missing or without a derivable account
            ChainConnectionError: transport failure
        """
        if identity is None:
            raise IdentityError("Identity required for a signing connection")
        address = self.identity_provider.primary_address(identity)
        if not isinstance(rpc_endpoint, str) or not rpc_endpoint:
            raise ChainConnectionError("RPC endpoint is required")

        current = self._state
        reuse_read = (
            isinstance(current, (ReadOnly, Signing)) and current.endpoint == rpc_endpoint
        )
        opened = []
        try:
            if reuse_read:
                read_handle = current.read_handle
            else:
                read_handle = await self.transport.open_read_only(rpc_endpoint)
                opened.append(read_handle)
            signing_handle = await self.transport.open_signing(
                rpc_endpoint, identity, self.gas_price
            )
        except BaseException:
            await self._close_quietly(opened)
            raise

        new_state = Signing(
            endpoint=rpc_endpoint,
            read_handle=read_handle,
            signing_handle=signing_handle,
            identity=identity,
            address=address,
            gas_price=self.gas_price,
        )
        old_state = self._swap(new_state)
        stale = [h for h in _handles_of(old_state) if h is not read_handle]
        await self._close_quietly(stale)
        logger.info(f"Wallet connected: {address}")
        return new_state

    async def disconnect(self) -> Disconnected:
        """Release every handle and the identity. Safe from any state, never raises."""
        old_state = self._swap(DISCONNECTED)
        handles = _handles_of(old_state)
        if handles:
            await self._close_quietly(handles)
            logger.info("Disconnected from MyChain")
        return DISCONNECTED

    def is_connected(self) -> bool:
        return not isinstance(self._state, Disconnected)

    def require_read_handle(self) -> Any:
        state = self._state
        if isinstance(state, Disconnected):
            raise ChainConnectionError("Client not connected")
        return state.read_handle

    def require_signing(self) -> Signing:
        state = self._state
        if not isinstance(state, Signing):
            raise ChainConnectionError(
                f"Signing client not connected (state is {state.name})"
            )
        return state
