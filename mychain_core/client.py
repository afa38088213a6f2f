"""
Client module - high level MyChain client

Wires connection, identity, message building, execution and queries
behind the surface applications use.
"""

import logging
from typing import Optional

from .config.settings import settings
from .core_client.connection import ConnectionManager, Signing
from .core_client.transport import NodeTransport
from .keymanager.identity import IdentityProvider, KeyDerivation
from .service.address import is_valid_address
from .service.executor import TransactionExecutor
from .service.messages import (
    ChainAction,
    CreateUser,
    MintTokens,
    RegisterMiner,
    TransactionBuilder,
    TransferTokens,
    make_amount,
)
from .service.query_service import ChainReader
from .types import FeePolicy, GasPrice

logger = logging.getLogger(__name__)


class MyChainClient:
    """
    Client for a MyChain node.

    Example:
        async with MyChainClient() as client:
            address = await client.connect_with_mnemonic(mnemonic)
            tx_hash = await client.transfer_tokens(address, receiver, "100")
    """

    def __init__(
        self,
        rpc_endpoint: Optional[str] = None,
        chain_id: Optional[str] = None,
        transport: Optional[NodeTransport] = None,
        key_derivation: Optional[KeyDerivation] = None,
        fee_policy: Optional[FeePolicy] = None,
        default_denom: Optional[str] = None,
    ):
        self.rpc_endpoint = rpc_endpoint or settings.RPC_ENDPOINT
        self.chain_id = chain_id or settings.CHAIN_ID
        self.default_denom = default_denom or settings.DEFAULT_DENOM
        if transport is None:
            from .async_client import HttpNodeTransport

            transport = HttpNodeTransport(expected_chain_id=self.chain_id)

        self.identity_provider = IdentityProvider(key_derivation)
        self.connection = ConnectionManager(
            transport,
            identity_provider=self.identity_provider,
            gas_price=GasPrice.from_string(settings.GAS_PRICE),
        )
        self.builder = TransactionBuilder()
        self.executor = TransactionExecutor(self.connection, fee_policy)
        self.reader = ChainReader(self.connection, default_denom=self.default_denom)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    @property
    def address(self) -> Optional[str]:
        """Active signer address, or None without a signing connection"""
        state = self.connection.current_state()
        return state.address if isinstance(state, Signing) else None

    async def connect(self) -> None:
        await self.connection.connect(self.rpc_endpoint)

    async def connect_with_mnemonic(self, mnemonic: str) -> str:
        """Derive the identity from ``mnemonic``, open a signing connection and return its address"""
        identity = self.identity_provider.from_secret(mnemonic)
        state = await self.connection.connect_with_identity(self.rpc_endpoint, identity)
        return state.address

    async def submit(
        self,
        action: ChainAction,
        memo: Optional[str] = None,
        fee_policy: Optional[FeePolicy] = None,
    ) -> str:
        envelope = self.builder.build(action)
        if memo is None and fee_policy is None:
            memo = action.DEFAULT_MEMO
        return await self.executor.execute(envelope, action.signer, memo, fee_policy)

    async def create_user(
        self, name: str, email: str, sender_address: str, memo: Optional[str] = None,
        fee_policy: Optional[FeePolicy] = None,
    ) -> str:
        return await self.submit(
            CreateUser(creator=sender_address, name=name, email=email), memo, fee_policy
        )

    async def transfer_tokens(
        self, sender_address: str, receiver_address: str, amount: str,
        denom: Optional[str] = None, memo: Optional[str] = None,
        fee_policy: Optional[FeePolicy] = None,
    ) -> str:
        action = TransferTokens(
            sender=sender_address,
            receiver=receiver_address,
            amount=make_amount(amount, denom or self.default_denom),
        )
        return await self.submit(action, memo, fee_policy)

    async def mint_tokens(
        self, minter_address: str, amount: str, denom: Optional[str] = None,
        memo: Optional[str] = None, fee_policy: Optional[FeePolicy] = None,
    ) -> str:
        action = MintTokens(minter=minter_address, amount=make_amount(amount, denom or self.default_denom))
        return await self.submit(action, memo, fee_policy)

    async def register_miner(
        self, miner_address: str, description: str, commission: str,
        memo: Optional[str] = None, fee_policy: Optional[FeePolicy] = None,
    ) -> str:
        action = RegisterMiner(miner=miner_address, description=description, commission=commission)
        return await self.submit(action, memo, fee_policy)

    async def get_current_height(self) -> int:
        return await self.reader.height()

    async def get_balance(self, address: str, denom: Optional[str] = None) -> str:
        return await self.reader.balance(address, denom)

    async def disconnect(self) -> None:
        await self.connection.disconnect()

    def is_connected(self) -> bool:
        return self.connection.is_connected()


class WalletUtils:
    """Static helpers that need no connection"""

    @staticmethod
    def generate_mnemonic() -> str:
        return IdentityProvider().generate_secret()

    @staticmethod
    def is_valid_address(address: str) -> bool:
        return is_valid_address(address)

    @staticmethod
    def address_from_mnemonic(mnemonic: str) -> str:
        provider = IdentityProvider()
        identity = provider.from_secret(mnemonic)
        return provider.primary_address(identity)


def generate_mnemonic() -> str:
    return WalletUtils.generate_mnemonic()


__all__ = ["MyChainClient", "WalletUtils", "generate_mnemonic"]
