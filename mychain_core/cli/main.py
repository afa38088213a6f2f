# file: mychain_core/cli/main.py

import importlib.metadata

import click
from rich.console import Console

from ..service.address import is_valid_address
from .query_cli import query_cli
from .wallet_cli import wallet_cli


@click.group()
def mychain():
    """
    MyChain client CLI: wallets, queries and address checks.
    """
    pass


mychain.add_command(wallet_cli, name="wallet")
mychain.add_command(query_cli, name="query")


@mychain.command("validate-address")
@click.argument("address")
def validate_address_cmd(address):
    """
    ✅ Check whether ADDRESS is a well formed MyChain address.
    """
    console = Console()
    if is_valid_address(address):
        console.print(f"✅ [bold green]{address} is a valid MyChain address[/bold green]")
    else:
        console.print(f"❌ [bold red]{address} is not a valid MyChain address[/bold red]")
        raise SystemExit(1)


@mychain.command("version")
def version_cmd():
    """
    Show the installed version.
    """
    try:
        version = importlib.metadata.version("mychain-core")
    except importlib.metadata.PackageNotFoundError:
        version = "unknown"
    Console().print(f"mychain-core {version}")


def main():
    mychain()


if __name__ == "__main__":
    main()
