"""Account commands."""

import asyncio

from rich.console import Console
from rich.table import Table

from zoneshift.cli.commands.common import get_accounts, get_client, resolve_account
from zoneshift.core.base import BaseProviderClient
from zoneshift.core.exceptions import ProviderError
from zoneshift.core.models import Account

console = Console()


async def _verify(client: BaseProviderClient, account: Account) -> Account:
    """Attach provider account info, or the error that prevented it."""
    try:
        account.info = await client.get_account(account.token)
    except ProviderError as e:
        account.error = str(e)
    return account


async def list_accounts(verify: bool, options):
    """List configured accounts."""
    accounts = await get_accounts(options)

    if not accounts:
        console.print(f"[yellow]No accounts configured in {options.accounts_file}[/]")
        return

    if verify:
        client = await get_client(options)
        try:
            await asyncio.gather(*(_verify(client, a) for a in accounts.values()))
        finally:
            await client.disconnect()

    table = Table(title="Accounts")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Status")

    for account in accounts.values():
        if account.error:
            table.add_row(account.name, "", f"[red]{account.error}[/]")
        elif account.info:
            table.add_row(account.name, account.info.email or "", account.info.status or "")
        else:
            table.add_row(account.name, "", "[dim]not verified[/]")

    console.print(table)


async def verify(name: str, options):
    """Show provider details for one account."""
    account = await resolve_account(name, options)
    client = await get_client(options)

    try:
        await _verify(client, account)
    finally:
        await client.disconnect()

    if account.error:
        console.print(f"[red]✗ {account.name}: {account.error}[/]")
        return

    table = Table(title=f"Account {account.name}")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")

    info = account.info
    table.add_row("Email", info.email or "Unknown")
    table.add_row("Email Verified", "yes" if info.email_verified else "no")
    table.add_row("Status", info.status or "Unknown")
    if info.status_message:
        table.add_row("Status Message", info.status_message)
    if info.droplet_limit is not None:
        table.add_row("Droplet Limit", str(info.droplet_limit))

    console.print(table)
