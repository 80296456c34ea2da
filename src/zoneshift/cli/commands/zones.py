"""Zone and instance listing commands."""

import typer
from rich.console import Console
from rich.table import Table

from zoneshift.cli.commands.common import get_client, resolve_account
from zoneshift.core.exceptions import ProviderError
from zoneshift.core.migrate.addresses import public_addresses
from zoneshift.core.models import ListKind

console = Console()


async def list_zones(account_name: str, options):
    """List zones of an account."""
    account = await resolve_account(account_name, options)
    client = await get_client(options)

    try:
        zones = await client.list_zones(account.token)
    except ProviderError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)
    finally:
        await client.disconnect()

    table = Table(title=f"Zones in {account.name}")
    table.add_column("Name", style="cyan")
    table.add_column("TTL")

    for zone in zones:
        table.add_row(zone.name, str(zone.ttl) if zone.ttl is not None else "")

    console.print(table)


async def list_records(account_name: str, zone_name: str, options):
    """List records of a zone."""
    account = await resolve_account(account_name, options)
    client = await get_client(options)

    try:
        records = await client.list_zone_records(account.token, zone_name)
    except ProviderError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)
    finally:
        await client.disconnect()

    table = Table(title=f"Records of {zone_name}")
    table.add_column("ID", style="dim")
    table.add_column("Type", style="magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Data", style="green")
    table.add_column("Priority")
    table.add_column("Port")
    table.add_column("Weight")
    table.add_column("TTL")

    for r in records:
        table.add_row(
            str(r.id),
            r.record_type,
            r.name,
            r.data,
            _optional(r.priority),
            _optional(r.port),
            _optional(r.weight),
            _optional(r.ttl),
        )

    console.print(table)


async def list_instances(account_name: str, options):
    """List droplets with their public addresses."""
    account = await resolve_account(account_name, options)
    client = await get_client(options)

    try:
        instances = await client.list_instances(account.token)
    except ProviderError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)
    finally:
        await client.disconnect()

    table = Table(title=f"Droplets in {account.name}")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Public IPv4", style="green")
    table.add_column("Public IPv6", style="green")

    for instance in instances:
        table.add_row(
            str(instance.id),
            instance.name,
            ", ".join(public_addresses(instance, ListKind.V4)),
            ", ".join(public_addresses(instance, ListKind.V6)),
        )

    console.print(table)


def _optional(value) -> str:
    return "" if value is None else str(value)
