"""Helpers shared by the command implementations."""

import typer
from rich.console import Console

from zoneshift.config import load_accounts
from zoneshift.core.base import BaseProviderClient
from zoneshift.core.digitalocean.client import DigitalOceanClient
from zoneshift.core.exceptions import ConfigurationError
from zoneshift.core.models import Account

console = Console()


async def get_client(options) -> BaseProviderClient:
    """Create and connect a provider client from the global options."""
    client = DigitalOceanClient(
        api_url=options.settings.api_url,
        timeout=options.settings.request_timeout,
    )
    await client.connect()
    return client


async def get_accounts(options) -> dict[str, Account]:
    try:
        return await load_accounts(options.accounts_file)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)


async def resolve_account(name: str, options) -> Account:
    """Look up a configured account by name, exiting if it is unknown."""
    accounts = await get_accounts(options)
    if name not in accounts:
        console.print(f"[red]Unknown account: {name}[/]")
        if accounts:
            console.print(f"Configured accounts: {', '.join(sorted(accounts))}")
        raise typer.Exit(1)
    return accounts[name]
