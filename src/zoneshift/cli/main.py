"""Main CLI entry point for zoneshift."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from zoneshift.config import Settings, get_settings
from zoneshift.logging_config import setup_logging

# Create the main app
app = typer.Typer(
    name="zoneshift",
    help="Copy, move and re-point DNS zones between DigitalOcean accounts and droplets",
    no_args_is_help=True,
)

console = Console()


# Global options stored in context
class GlobalOptions:
    def __init__(self):
        self.settings: Settings | None = None
        self.accounts_file: Optional[Path] = None
        self.verbose: bool = False
        self.debug: bool = False


# ============================================================================
# Account Commands
# ============================================================================

accounts_app = typer.Typer(help="Configured accounts")
app.add_typer(accounts_app, name="accounts")


@accounts_app.command("list")
def accounts_list(
    ctx: typer.Context,
    verify: bool = typer.Option(False, "--verify", help="Check each token against the API"),
):
    """List configured accounts."""
    from zoneshift.cli.commands.accounts import list_accounts

    asyncio.run(list_accounts(verify, ctx.obj))


@accounts_app.command("verify")
def accounts_verify(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Account name"),
):
    """Show provider details for an account."""
    from zoneshift.cli.commands.accounts import verify

    asyncio.run(verify(name, ctx.obj))


# ============================================================================
# Zone Commands
# ============================================================================

zones_app = typer.Typer(help="Zone listing")
app.add_typer(zones_app, name="zones")


@zones_app.command("list")
def zones_list(
    ctx: typer.Context,
    account: str = typer.Option(..., "--account", "-a", help="Account name"),
):
    """List zones of an account."""
    from zoneshift.cli.commands.zones import list_zones

    asyncio.run(list_zones(account, ctx.obj))


@zones_app.command("records")
def zones_records(
    ctx: typer.Context,
    zone: str = typer.Argument(..., help="Zone name"),
    account: str = typer.Option(..., "--account", "-a", help="Account name"),
):
    """List records of a zone."""
    from zoneshift.cli.commands.zones import list_records

    asyncio.run(list_records(account, zone, ctx.obj))


# ============================================================================
# Instance Commands
# ============================================================================

instances_app = typer.Typer(help="Droplet listing")
app.add_typer(instances_app, name="instances")


@instances_app.command("list")
def instances_list(
    ctx: typer.Context,
    account: str = typer.Option(..., "--account", "-a", help="Account name"),
):
    """List droplets and their public addresses."""
    from zoneshift.cli.commands.zones import list_instances

    asyncio.run(list_instances(account, ctx.obj))


# ============================================================================
# Migrate Commands
# ============================================================================

migrate_app = typer.Typer(help="Zone migration")
app.add_typer(migrate_app, name="migrate")


@migrate_app.command("plan")
def migrate_plan(
    ctx: typer.Context,
    zone: str = typer.Argument(..., help="Source zone name"),
    account: str = typer.Option(..., "--account", "-a", help="Source account"),
    to_account: Optional[str] = typer.Option(
        None, "--to-account", "-t", help="Destination account (default: source)"
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Destination zone name (default: source zone)"
    ),
    instance: Optional[str] = typer.Option(
        None, "--instance", "-i", help="Destination droplet id or name"
    ),
    edits: Optional[list[str]] = typer.Option(
        None, "--set", help="Override a record's data: ID=DATA (repeatable)"
    ),
):
    """Show what a migration would write."""
    from zoneshift.cli.commands.migrate import plan

    asyncio.run(plan(zone, account, to_account, name, instance, edits, ctx.obj))


@migrate_app.command("run")
def migrate_run(
    ctx: typer.Context,
    zone: str = typer.Argument(..., help="Source zone name"),
    account: str = typer.Option(..., "--account", "-a", help="Source account"),
    to_account: Optional[str] = typer.Option(
        None, "--to-account", "-t", help="Destination account (default: source)"
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Destination zone name (default: source zone)"
    ),
    instance: Optional[str] = typer.Option(
        None, "--instance", "-i", help="Destination droplet id or name"
    ),
    edits: Optional[list[str]] = typer.Option(
        None, "--set", help="Override a record's data: ID=DATA (repeatable)"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Confirm moves without prompting"),
):
    """Copy, move or change a zone."""
    from zoneshift.cli.commands.migrate import run

    asyncio.run(run(zone, account, to_account, name, instance, edits, yes, ctx.obj))


# ============================================================================
# Version Command
# ============================================================================


@app.command("version")
def version():
    """Show version information."""
    from zoneshift import __version__

    console.print(f"zoneshift version {__version__}")


# ============================================================================
# Main Callback (Global Options)
# ============================================================================


@app.callback()
def main(
    ctx: typer.Context,
    accounts_file: Optional[Path] = typer.Option(
        None, "--accounts-file", help="Accounts YAML file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug mode"),
):
    """zoneshift - DNS zone migration between accounts and droplets."""
    settings = get_settings()

    if debug:
        setup_logging(logging.DEBUG)
    elif verbose:
        setup_logging(logging.INFO)
    else:
        setup_logging(settings.log_level.upper())

    ctx.ensure_object(GlobalOptions)
    ctx.obj.settings = settings
    ctx.obj.accounts_file = accounts_file or settings.accounts_file
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


if __name__ == "__main__":
    app()
