"""
HttpNodeTransport against a local aiohttp test server
"""

import base64

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from mychain_core.async_client import HttpNodeTransport
from mychain_core.core_client.transport import TxEncoder
from mychain_core.errors import ChainConnectionError
from mychain_core.service.messages import TransactionBuilder
from mychain_core.types import FeePolicy, GasPrice

from .conftest import RECEIVER_ADDRESS


class FakeEncoder(TxEncoder):
    def __init__(self):
        self.calls = []

    async def encode(self, identity, sender_address, envelopes, fee_policy, memo, *, chain_id, gas_price):
        self.calls.append(
            {"sender": sender_address, "memo": memo, "chain_id": chain_id, "gas_price": gas_price}
        )
        return b"signed-tx"


def make_app(broadcast_result=None, balances=None):
    received = []

    async def status(request):
        return web.json_response(
            {
                "result": {
                    "node_info": {"network": "mychain-1"},
                    "sync_info": {"latest_block_height": "1234"},
                }
            }
        )

    async def balance(request):
        key = (request.match_info["address"], request.query.get("denom"))
        amount = (balances or {}).get(key, "0")
        return web.json_response({"balance": {"denom": key[1], "amount": amount}})

    async def rpc(request):
        body = await request.json()
        received.append(body)
        return web.json_response(
            {"jsonrpc": "2.0", "id": body["id"], "result": broadcast_result}
        )

    app = web.Application()
    app.router.add_get("/status", status)
    app.router.add_get("/cosmos/bank/v1beta1/balances/{address}/by_denom", balance)
    app.router.add_post("/", rpc)
    return app, received


def base_url(server):
    return str(server.make_url("/")).rstrip("/")


@pytest.mark.asyncio
async def test_read_only_handshake_height_and_balance():
    app, received = make_app(balances={(RECEIVER_ADDRESS, "mychain"): "250"})
    async with TestServer(app) as server:
        url = base_url(server)
        transport = HttpNodeTransport(rest_endpoint=url)
        handle = await transport.open_read_only(url)
        try:
            assert handle.chain_id == "mychain-1"
            assert await transport.get_height(handle) == 1234
            balance = await transport.get_balance(handle, RECEIVER_ADDRESS, "mychain")
            assert balance.value == "250"
            empty = await transport.get_balance(handle, RECEIVER_ADDRESS, "other")
            assert empty.value == "0"
        finally:
            await transport.close(handle)
        assert handle.closed
        # closing twice is harmless
        await transport.close(handle)


@pytest.mark.asyncio
async def test_unreachable_endpoint():
    transport = HttpNodeTransport(rest_endpoint="http://127.0.0.1:9", timeout=2)
    with pytest.raises(ChainConnectionError):
        await transport.open_read_only("http://127.0.0.1:9")


@pytest.mark.asyncio
async def test_signing_requires_encoder(test_identity):
    app, received = make_app()
    async with TestServer(app) as server:
        transport = HttpNodeTransport(rest_endpoint=base_url(server))
        with pytest.raises(ChainConnectionError):
            await transport.open_signing(base_url(server), test_identity, GasPrice.from_string("0.1umychain"))


@pytest.mark.asyncio
async def test_sign_and_broadcast(test_identity, test_address):
    app, received = make_app(broadcast_result={"code": 0, "hash": "A1B2", "log": "[]", "codespace": ""})
    encoder = FakeEncoder()
    async with TestServer(app) as server:
        url = base_url(server)
        transport = HttpNodeTransport(rest_endpoint=url, tx_encoder=encoder)
        gas_price = GasPrice.from_string("0.1umychain")
        handle = await transport.open_signing(url, test_identity, gas_price)
        envelope = TransactionBuilder().mint_tokens(test_address, "10")
        try:
            result = await transport.sign_and_broadcast(
                handle, test_address, [envelope], FeePolicy(), "Mint tokens"
            )
        finally:
            await transport.close(handle)

    assert result.status_code == 0
    assert result.transaction_hash == "A1B2"
    assert encoder.calls[0]["chain_id"] == "mychain-1"
    assert encoder.calls[0]["gas_price"] == gas_price
    body = received[0]
    assert body["method"] == "broadcast_tx_sync"
    assert base64.b64decode(body["params"]["tx"]) == b"signed-tx"


@pytest.mark.asyncio
async def test_broadcast_rejection_is_reported(test_identity, test_address):
    app, received = make_app(
        broadcast_result={"code": 5, "hash": "FF", "log": "insufficient funds", "codespace": "sdk"}
    )
    async with TestServer(app) as server:
        url = base_url(server)
        transport = HttpNodeTransport(rest_endpoint=url, tx_encoder=FakeEncoder())
        handle = await transport.open_signing(url, test_identity, GasPrice.from_string("0.1umychain"))
        envelope = TransactionBuilder().mint_tokens(test_address, "10")
        try:
            result = await transport.sign_and_broadcast(handle, test_address, [envelope], FeePolicy(), "")
        finally:
            await transport.close(handle)
    assert result.status_code == 5
    assert result.raw_log == "insufficient funds"
    assert result.codespace == "sdk"


@pytest.mark.asyncio
async def test_read_handle_cannot_broadcast(test_address):
    app, received = make_app()
    async with TestServer(app) as server:
        url = base_url(server)
        transport = HttpNodeTransport(rest_endpoint=url, tx_encoder=FakeEncoder())
        handle = await transport.open_read_only(url)
        try:
            with pytest.raises(ChainConnectionError):
                await transport.sign_and_broadcast(handle, test_address, [], FeePolicy(), "")
        finally:
            await transport.close(handle)


@pytest.mark.asyncio
async def test_malformed_status_fails_handshake():
    async def status(request):
        return web.json_response({"result": {}})

    app = web.Application()
    app.router.add_get("/status", status)
    async with TestServer(app) as server:
        transport = HttpNodeTransport(rest_endpoint=base_url(server))
        with pytest.raises(ChainConnectionError):
            await transport.open_read_only(base_url(server))


@pytest.mark.asyncio
async def test_broadcast_without_code_is_malformed(test_identity, test_address):
    app, received = make_app(broadcast_result={"hash": "AB"})
    async with TestServer(app) as server:
        url = base_url(server)
        transport = HttpNodeTransport(rest_endpoint=url, tx_encoder=FakeEncoder())
        handle = await transport.open_signing(url, test_identity, GasPrice.from_string("0.1umychain"))
        envelope = TransactionBuilder().mint_tokens(test_address, "10")
        try:
            with pytest.raises(ChainConnectionError):
                await transport.sign_and_broadcast(handle, test_address, [envelope], FeePolicy(), "")
        finally:
            await transport.close(handle)


@pytest.mark.asyncio
async def test_handshake_rejects_other_chain():
    app, received = make_app()
    async with TestServer(app) as server:
        transport = HttpNodeTransport(rest_endpoint=base_url(server), expected_chain_id="other-1")
        with pytest.raises(ChainConnectionError, match="other-1"):
            await transport.open_read_only(base_url(server))


@pytest.mark.asyncio
async def test_handshake_accepts_expected_chain():
    app, received = make_app()
    async with TestServer(app) as server:
        transport = HttpNodeTransport(rest_endpoint=base_url(server), expected_chain_id="mychain-1")
        handle = await transport.open_read_only(base_url(server))
        await transport.close(handle)
    assert handle.chain_id == "mychain-1"
