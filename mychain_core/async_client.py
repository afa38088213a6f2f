"""
aiohttp transport to a MyChain node.
Queries go through Tendermint RPC and the Cosmos REST API; broadcasts use
the RPC ``broadcast_tx_sync`` method.
"""

import asyncio
import base64
import itertools
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

import aiohttp

from .config.settings import settings
from .core_client.transport import NodeTransport, TxEncoder
from .errors import ChainConnectionError
from .keymanager.identity import Identity
from .types import Amount, BroadcastResult, FeePolicy, GasPrice

logger = logging.getLogger(__name__)


@dataclass
class HttpHandle:
    """One open aiohttp session to a node."""

    session: aiohttp.ClientSession
    rpc_endpoint: str
    rest_endpoint: Optional[str]
    chain_id: str
    identity: Optional[Identity] = field(default=None, repr=False)
    gas_price: Optional[GasPrice] = None

    @property
    def closed(self) -> bool:
        return self.session.closed


class HttpNodeTransport(NodeTransport):
    """NodeTransport over HTTP using aiohttp"""

    def __init__(
        self,
        rest_endpoint: Optional[str] = None,
        tx_encoder: Optional[TxEncoder] = None,
        timeout: Optional[float] = None,
        expected_chain_id: Optional[str] = None,
    ):
        self.rest_endpoint = (rest_endpoint or settings.REST_ENDPOINT).rstrip("/")
        self.tx_encoder = tx_encoder
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.expected_chain_id = expected_chain_id
        self._request_ids = itertools.count(1)

    async def _open(self, endpoint: str) -> HttpHandle:
        endpoint = endpoint.rstrip("/")
        session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        try:
            status = await self._get_json(session, f"{endpoint}/status")
            chain_id = status["result"]["node_info"]["network"]
        except ChainConnectionError:
            await session.close()
            raise
        except (KeyError, TypeError) as e:
            await session.close()
            raise ChainConnectionError(f"Handshake with {endpoint} failed: malformed status") from e
        if self.expected_chain_id and chain_id != self.expected_chain_id:
            await session.close()
            raise ChainConnectionError(
                f"Node at {endpoint} serves chain {chain_id}, expected {self.expected_chain_id}"
            )
        logger.debug(f"Handshake with {endpoint} ok, chain id {chain_id}")
        return HttpHandle(
            session=session,
            rpc_endpoint=endpoint,
            rest_endpoint=self.rest_endpoint,
            chain_id=chain_id,
        )

    async def open_read_only(self, endpoint: str) -> HttpHandle:
        return await self._open(endpoint)

    async def open_signing(self, endpoint: str, identity: Identity, gas_price: GasPrice) -> HttpHandle:
        if self.tx_encoder is None:
            raise ChainConnectionError("Signing requires a transaction encoder")
        handle = await self._open(endpoint)
        handle.identity = identity
        handle.gas_price = gas_price
        return handle

    async def close(self, handle: HttpHandle) -> None:
        if not handle.session.closed:
            await handle.session.close()

    async def get_height(self, handle: HttpHandle) -> int:
        status = await self._get_json(handle.session, f"{handle.rpc_endpoint}/status")
        try:
            return int(status["result"]["sync_info"]["latest_block_height"])
        except (KeyError, TypeError, ValueError) as e:
            raise ChainConnectionError(f"Malformed status response: {e}") from e

    async def get_balance(self, handle: HttpHandle, address: str, denom: str) -> Optional[Amount]:
        if not handle.rest_endpoint:
            raise ChainConnectionError("REST endpoint not configured")
        url = f"{handle.rest_endpoint}/cosmos/bank/v1beta1/balances/{address}/by_denom"
        data = await self._get_json(handle.session, url, params={"denom": denom})
        balance = data.get("balance") if isinstance(data, dict) else None
        if not balance:
            return None
        try:
            return Amount(value=balance.get("amount") or "0", denom=balance.get("denom") or denom)
        except AttributeError as e:
            raise ChainConnectionError(f"Malformed balance response: {balance!r}") from e

    async def sign_and_broadcast(
        self,
        handle: HttpHandle,
        sender_address: str,
        envelopes: Sequence[Any],
        fee_policy: FeePolicy,
        memo: str,
    ) -> BroadcastResult:
        if handle.identity is None or self.tx_encoder is None:
            raise ChainConnectionError("Handle is not a signing handle")
        tx_bytes = await self.tx_encoder.encode(
            handle.identity,
            sender_address,
            envelopes,
            fee_policy,
            memo,
            chain_id=handle.chain_id,
            gas_price=handle.gas_price,
        )
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": "broadcast_tx_sync",
            "params": {"tx": base64.b64encode(tx_bytes).decode("ascii")},
        }
        response = await self._post_json(handle.session, handle.rpc_endpoint, payload)
        if response.get("error"):
            raise ChainConnectionError(f"broadcast_tx_sync failed: {response['error']}")
        try:
            result = response["result"]
            if not isinstance(result, dict) or "code" not in result:
                raise ChainConnectionError("Malformed broadcast response: missing code")
            return BroadcastResult(
                status_code=int(result["code"]),
                transaction_hash=result.get("hash", ""),
                raw_log=result.get("log", ""),
                codespace=result.get("codespace", ""),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ChainConnectionError(f"Malformed broadcast response: {e}") from e

    async def _get_json(self, session: aiohttp.ClientSession, url: str, params: Optional[Dict] = None) -> Any:
        try:
            async with session.get(url, params=params) as resp:
                resp.raise_for_status()
                return await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ChainConnectionError(f"GET {url} failed: {e}") from e

    async def _post_json(self, session: aiohttp.ClientSession, url: str, payload: Dict) -> Dict:
        try:
            async with session.post(url, json=payload) as resp:
                resp.raise_for_status()
                data = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise ChainConnectionError(f"POST {url} failed: {e}") from e
        if not isinstance(data, dict):
            raise ChainConnectionError(f"POST {url} returned a non-object response")
        return data
