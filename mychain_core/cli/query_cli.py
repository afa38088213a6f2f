# file: mychain_core/cli/query_cli.py
"""
Command-line interface for querying MyChain state.
"""

import asyncio
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from ..async_client import HttpNodeTransport
from ..config.config_loader import ConfigError, load_network
from ..config.settings import settings
from ..core_client.connection import ConnectionManager
from ..errors import MyChainError
from ..service.query_service import ChainReader


def _resolve_endpoints(network: Optional[str], rpc: Optional[str], rest: Optional[str]):
    network = network or settings.NETWORK
    if network:
        preset = load_network(network)
        return rpc or preset.rpc_endpoint, rest or preset.rest_endpoint, preset.denom
    return rpc or settings.RPC_ENDPOINT, rest or settings.REST_ENDPOINT, settings.DEFAULT_DENOM


async def _with_reader(rpc: str, rest: str, call):
    connection = ConnectionManager(HttpNodeTransport(rest_endpoint=rest))
    try:
        await connection.connect(rpc)
        return await call(ChainReader(connection))
    finally:
        await connection.disconnect()


def endpoint_options(func):
    func = click.option("--rest", help="Cosmos REST endpoint (overrides the preset).")(func)
    func = click.option("--rpc", help="Tendermint RPC endpoint (overrides the preset).")(func)
    func = click.option(
        "--network",
        default=None,
        envvar="MYCHAIN_NETWORK",
        help="Network preset from networks.yaml (local, testnet).",
    )(func)
    return func


@click.group()
def query_cli():
    """
    🔍 Commands for querying MyChain data.
    """
    pass


@query_cli.command("height")
@endpoint_options
def height_cmd(network, rpc, rest):
    """
    📏 Show the latest block height.
    """
    console = Console()
    try:
        rpc, rest, _ = _resolve_endpoints(network, rpc, rest)
        height = asyncio.run(_with_reader(rpc, rest, lambda reader: reader.height()))
    except (MyChainError, ConfigError) as e:
        console.print(f"❌ [bold red]Error:[/bold red] {e}")
        raise SystemExit(1)
    console.print(f"[bold]Height:[/bold] [green]{height}[/green] ([dim]{rpc}[/dim])")


@query_cli.command("balance")
@click.option("--address", required=True, help="MyChain account address to query.")
@click.option("--denom", default=None, help="Token denom (defaults to the native token).")
@endpoint_options
def balance_cmd(address, denom, network, rpc, rest):
    """
    💰 Show the balance of an account.
    """
    console = Console()
    try:
        rpc, rest, default_denom = _resolve_endpoints(network, rpc, rest)
        denom = denom or default_denom
        amount = asyncio.run(
            _with_reader(rpc, rest, lambda reader: reader.balance(address, denom))
        )
    except (MyChainError, ConfigError) as e:
        console.print(f"❌ [bold red]Error:[/bold red] {e}")
        raise SystemExit(1)

    console.print(
        Panel(
            f"[bold]Address:[/bold] [blue]{address}[/blue]\n"
            f"[bold]Balance:[/bold] [green]{amount} {denom}[/green]",
            title="Account Balance",
            expand=False,
        )
    )
