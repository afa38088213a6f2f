# file: mychain_core/cli/wallet_cli.py
"""
Command-line interface for MyChain wallets.

Generates mnemonics and derives the primary account address of an
existing mnemonic. Nothing is written to disk.
"""

import click
from rich.console import Console
from rich.panel import Panel

from ..errors import MyChainError
from ..keymanager.identity import IdentityProvider


@click.group()
def wallet_cli():
    """
    🏦 Wallet commands: mnemonic generation and address derivation.
    """
    pass


@wallet_cli.command("generate")
def generate_cmd():
    """
    🔐 Generate a fresh 12-word mnemonic and show its primary address.
    """
    console = Console()
    provider = IdentityProvider()
    try:
        mnemonic = provider.generate_secret()
        address = provider.primary_address(provider.from_secret(mnemonic))
    except MyChainError as e:
        console.print(f"❌ [bold red]Error:[/bold red] {e}")
        raise SystemExit(1)

    console.print(
        Panel.fit(
            f"[bold yellow]Mnemonic:[/bold yellow]\n[bold white]{mnemonic}[/bold white]\n\n"
            f"[bold]Address:[/bold] [blue]{address}[/blue]\n\n"
            f"[bold red]⚠️  Store this mnemonic securely, it is the only way to recover the account.[/bold red]",
            title="🏦 New Wallet",
            border_style="yellow",
        )
    )


@wallet_cli.command("address")
@click.option(
    "--mnemonic",
    envvar="MYCHAIN_MNEMONIC",
    prompt=True,
    hide_input=True,
    help="Mnemonic phrase (or set MYCHAIN_MNEMONIC).",
)
def address_cmd(mnemonic):
    """
    📬 Print the primary account address of a mnemonic.
    """
    console = Console()
    provider = IdentityProvider()
    try:
        address = provider.primary_address(provider.from_secret(mnemonic))
    except MyChainError as e:
        console.print(f"❌ [bold red]Error:[/bold red] {e}")
        raise SystemExit(1)
    console.print(address)
