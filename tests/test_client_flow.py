"""
End-to-end flows through MyChainClient with the in-memory transport
"""

import pytest

from mychain_core.client import MyChainClient, WalletUtils, generate_mnemonic
from mychain_core.core_client.connection import Disconnected, Signing
from mychain_core.errors import ChainConnectionError, TransactionError, ValidationError
from mychain_core.keymanager.identity import IdentityProvider
from mychain_core.service.executor import TransactionExecutor
from mychain_core.service.messages import TransactionBuilder
from mychain_core.types import BroadcastResult

from .conftest import RECEIVER_ADDRESS, TEST_MNEMONIC

ENDPOINT = "http://localhost:26657"


@pytest.fixture
def client(mock_transport):
    return MyChainClient(rpc_endpoint=ENDPOINT, transport=mock_transport)


@pytest.mark.asyncio
async def test_generate_derive_connect_transfer(mock_transport):
    """Generate secret, derive identity, connect, build a transfer and execute it."""
    provider = IdentityProvider()
    secret = provider.generate_secret()
    identity = provider.from_secret(secret)
    sender = provider.primary_address(identity)

    client = MyChainClient(rpc_endpoint=ENDPOINT, transport=mock_transport)
    state = await client.connection.connect_with_identity(ENDPOINT, identity)
    assert isinstance(state, Signing)

    envelope = TransactionBuilder().transfer_tokens(sender, RECEIVER_ADDRESS, "100", "mychain")
    tx_hash = await TransactionExecutor(client.connection).execute(envelope, sender, "Transfer tokens")
    assert tx_hash

    await client.disconnect()
    assert isinstance(client.connection.current_state(), Disconnected)


@pytest.mark.asyncio
async def test_connect_with_mnemonic_returns_address(client):
    address = await client.connect_with_mnemonic(TEST_MNEMONIC)
    assert WalletUtils.is_valid_address(address)
    assert client.address == address
    assert client.is_connected()


@pytest.mark.asyncio
async def test_domain_actions_use_default_memos(client, mock_transport):
    address = await client.connect_with_mnemonic(TEST_MNEMONIC)
    await client.create_user("alice", "alice@example.com", address)
    await client.transfer_tokens(address, RECEIVER_ADDRESS, "100")
    await client.mint_tokens(address, "500")
    await client.register_miner(address, "gpu rig", "0.05")

    memos = [b["memo"] for b in mock_transport.broadcasts]
    assert memos == ["Create new user", "Transfer tokens", "Mint tokens", "Register as miner"]
    type_urls = [b["envelopes"][0].type_url for b in mock_transport.broadcasts]
    assert type_urls == [
        "/mychain.mychain.MsgCreateUser",
        "/mychain.mychain.MsgTransferTokens",
        "/mychain.mychain.MsgMintTokens",
        "/mychain.mychain.MsgRegisterMiner",
    ]
    assert mock_transport.broadcasts[1]["envelopes"][0].value["amount"] == [
        {"denom": "mychain", "amount": "100"}
    ]


@pytest.mark.asyncio
async def test_custom_memo(client, mock_transport):
    address = await client.connect_with_mnemonic(TEST_MNEMONIC)
    await client.mint_tokens(address, "1", memo="airdrop")
    assert mock_transport.broadcasts[0]["memo"] == "airdrop"


@pytest.mark.asyncio
async def test_signing_action_in_read_only_state(client, mock_transport):
    await client.connect()
    with pytest.raises(ChainConnectionError):
        await client.mint_tokens("mychain1" + "q" * 38, "1")
    assert mock_transport.broadcasts == []


@pytest.mark.asyncio
async def test_validation_happens_before_network(client, mock_transport):
    address = await client.connect_with_mnemonic(TEST_MNEMONIC)
    with pytest.raises(ValidationError):
        await client.transfer_tokens(address, "bad", "100")
    with pytest.raises(ValidationError):
        await client.transfer_tokens(address, RECEIVER_ADDRESS, "1.5")
    assert mock_transport.broadcasts == []


@pytest.mark.asyncio
async def test_chain_rejection_surfaces(client, mock_transport):
    mock_transport.next_result = BroadcastResult(5, "HASH", "insufficient funds")
    address = await client.connect_with_mnemonic(TEST_MNEMONIC)
    with pytest.raises(TransactionError) as exc_info:
        await client.transfer_tokens(address, RECEIVER_ADDRESS, "100")
    assert exc_info.value.code == 5


@pytest.mark.asyncio
async def test_queries(client, mock_transport):
    mock_transport.set_balance(RECEIVER_ADDRESS, "mychain", "42")
    await client.connect()
    assert await client.get_current_height() == mock_transport.height
    assert await client.get_balance(RECEIVER_ADDRESS) == "42"
    assert await client.get_balance(RECEIVER_ADDRESS, "other") == "0"


@pytest.mark.asyncio
async def test_context_manager_disconnects(mock_transport):
    async with MyChainClient(rpc_endpoint=ENDPOINT, transport=mock_transport) as client:
        await client.connect()
        assert client.is_connected()
    assert client.is_connected() is False
    assert all(handle.closed for handle in mock_transport.opened)


def test_wallet_utils():
    mnemonic = generate_mnemonic()
    assert len(mnemonic.split()) == 12
    address = WalletUtils.address_from_mnemonic(mnemonic)
    assert WalletUtils.is_valid_address(address)
    assert WalletUtils.is_valid_address("mychain1short") is False


def test_default_transport_pins_chain_id():
    client = MyChainClient(rpc_endpoint=ENDPOINT, chain_id="mychain-testnet-1")
    assert client.connection.transport.expected_chain_id == "mychain-testnet-1"
