"""Migration command implementations."""

from typing import Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn
from rich.table import Table

from zoneshift.cli.commands.common import get_client, resolve_account
from zoneshift.core.exceptions import MigrationValidationError
from zoneshift.core.migrate.orchestrator import MigrationOrchestrator
from zoneshift.core.models import (
    Account,
    MigrationPhase,
    MigrationPlan,
    MigrationSession,
    Zone,
)

console = Console()


def parse_edit(edit: str) -> tuple[int, str]:
    """Split an ``ID=DATA`` record override."""
    record_id, sep, data = edit.partition("=")
    if not sep or not record_id.strip().isdigit():
        raise typer.BadParameter(f"Expected ID=DATA, got {edit!r}", param_hint="--set")
    return int(record_id), data


async def _prepare(
    orchestrator: MigrationOrchestrator,
    source: Account,
    destination: Account,
    zone: str,
    name: Optional[str],
    instance: Optional[str],
    edits: Optional[list[str]],
) -> MigrationSession:
    """Open a session and apply the command line selections to it."""
    session = await orchestrator.open(source, Zone(name=zone))
    _exit_if_failed(session)

    if destination.name != source.name:
        session = await orchestrator.change_destination_account(destination)
        _exit_if_failed(session)

    if instance:
        orchestrator.select_destination_instance(instance)

    # Edits after the instance selection, which would discard them.
    for edit in edits or []:
        record_id, data = parse_edit(edit)
        orchestrator.edit_record(record_id, data)

    orchestrator.set_destination_zone_name(name if name is not None else zone)
    return session


def _exit_if_failed(session: MigrationSession) -> None:
    if session.phase is MigrationPhase.FAILED:
        console.print(f"[red]✗ {session.last_error}[/]")
        raise typer.Exit(1)


def show_session(session: MigrationSession, plan: MigrationPlan) -> None:
    """Print the proposed records and what committing would do."""
    originals = {r.id: r for r in session.original_records or []}
    destination = session.destination_instance

    console.print(
        f"\n[bold]{plan.kind.value.upper()}: "
        f"{session.source_zone.name} ({session.source_account.name}) → "
        f"{session.destination_zone_name or '?'} ({session.destination_account.name})[/]"
    )
    if destination:
        console.print(f"Destination droplet: {destination.name} ({destination.id})\n")

    table = Table(title="Proposed Records")
    table.add_column("ID", style="dim")
    table.add_column("Type", style="magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Data", style="green")
    table.add_column("Was")

    for record in session.working_records:
        original = originals.get(record.id)
        was = original.data if original and original.data != record.data else ""
        table.add_row(str(record.id), record.record_type, record.name, record.data, was)

    console.print(table)

    if plan.confirmation_required:
        console.print(f"\n[yellow]⚠ Requires confirmation: {plan.confirmation_message}[/]")
    if not plan.committable and not plan.confirmation_required:
        console.print("\n[yellow]Not committable: destination zone name is empty[/]")


async def plan(
    zone: str,
    account: str,
    to_account: Optional[str],
    name: Optional[str],
    instance: Optional[str],
    edits: Optional[list[str]],
    options,
):
    """Show the records a migration would write."""
    source = await resolve_account(account, options)
    destination = await resolve_account(to_account, options) if to_account else source
    client = await get_client(options)

    try:
        orchestrator = MigrationOrchestrator(client)
        session = await _prepare(
            orchestrator, source, destination, zone, name, instance, edits
        )
        show_session(session, orchestrator.plan())
    except MigrationValidationError as e:
        console.print(f"[red]✗ {e}[/]")
        raise typer.Exit(1)
    finally:
        await client.disconnect()


async def run(
    zone: str,
    account: str,
    to_account: Optional[str],
    name: Optional[str],
    instance: Optional[str],
    edits: Optional[list[str]],
    yes: bool,
    options,
):
    """Execute a migration."""
    source = await resolve_account(account, options)
    destination = await resolve_account(to_account, options) if to_account else source
    client = await get_client(options)

    try:
        orchestrator = MigrationOrchestrator(client)
        session = await _prepare(
            orchestrator, source, destination, zone, name, instance, edits
        )
        migration_plan = orchestrator.plan()
        show_session(session, migration_plan)

        if migration_plan.confirmation_required:
            if not yes and not typer.confirm(
                f"Confirm {migration_plan.confirmation_message} ({destination.name})?"
            ):
                console.print("[yellow]Aborted[/]")
                raise typer.Exit(1)
            orchestrator.set_confirmation(True)

        with Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Starting", total=None)

            def on_progress(current: MigrationSession) -> None:
                progress.update(
                    task,
                    completed=current.progress.completed,
                    total=current.progress.total,
                    description=current.progress.message,
                )

            orchestrator.on_progress = on_progress
            session = await orchestrator.commit()

    except MigrationValidationError as e:
        console.print(f"[red]✗ {e}[/]")
        raise typer.Exit(1)
    finally:
        await client.disconnect()

    if session.phase is MigrationPhase.FAILED:
        console.print(
            f"[red]✗ {session.kind.value.capitalize()} failed after "
            f"{session.progress.completed} of {session.progress.total} records: "
            f"{session.last_error}[/]"
        )
        raise typer.Exit(1)

    console.print(
        f"[green]✓ {session.kind.value.capitalize()} complete: "
        f"{session.active_zone.name} in account {session.active_account.name}[/]"
    )
