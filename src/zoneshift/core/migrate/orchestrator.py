"""Migration orchestrator driving zone copies, moves and in-place changes."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import TypeVar

from zoneshift.core.base import BaseProviderClient
from zoneshift.core.exceptions import (
    AccountReadOnlyError,
    MigrationStateError,
    MigrationValidationError,
    ZoneshiftError,
)
from zoneshift.core.migrate.addresses import find_owner
from zoneshift.core.migrate.planner import classify
from zoneshift.core.migrate.remapper import derive_working_records, first_address_record
from zoneshift.core.models import (
    COMMITTING_PHASES,
    Account,
    Instance,
    MigrationKind,
    MigrationPhase,
    MigrationPlan,
    MigrationProgress,
    MigrationSession,
    RecordUpdate,
    Zone,
    ZoneCreate,
    ZoneRecord,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[MigrationSession], None]

T = TypeVar("T")


class MigrationOrchestrator:
    """
    Owns one migration session and drives it against the provider.

    Handles:
    - Fetching instances and records when a session is opened
    - Re-deriving the proposed records whenever the destination changes
    - Classifying the commit and enforcing its preconditions
    - Transferring records one call at a time, stopping at the first error

    Nothing is rolled back on failure; the session keeps the error and a new
    session must be opened to try again.
    """

    def __init__(
        self,
        provider: BaseProviderClient,
        on_progress: ProgressCallback | None = None,
    ):
        self.provider = provider
        self.on_progress = on_progress

        self._session: MigrationSession | None = None

    @property
    def session(self) -> MigrationSession | None:
        return self._session

    def plan(self) -> MigrationPlan:
        """Classify the current session."""
        return classify(self._require_session())

    # ========================================================================
    # Session lifecycle
    # ========================================================================

    async def open(self, account: Account, zone: Zone) -> MigrationSession:
        """Start a new session for ``zone`` and fetch everything it depends on."""
        if self._session and self._session.phase in COMMITTING_PHASES:
            raise MigrationStateError("A migration is already being committed")

        session = MigrationSession(
            phase=MigrationPhase.FETCHING_DEPENDENCIES,
            source_account=account,
            source_zone=zone,
            destination_account=account,
            active_account=account,
            active_zone=zone,
        )
        self._session = session
        logger.info("Opening migration of %s from account %s", zone.name, account.name)

        # Records and instances are independent; the destination instance
        # fetch is chained behind the source instance fetch.
        await asyncio.gather(
            self._load_source_records(session),
            self._load_source_instances(session),
        )

        if self._is_current(session) and session.phase is MigrationPhase.FETCHING_DEPENDENCIES:
            self._enter(session, MigrationPhase.READY)
        return session

    def reset(self) -> None:
        """Drop the current session. Responses still in flight are discarded."""
        if self._session and self._session.phase in COMMITTING_PHASES:
            raise MigrationStateError("Cannot reset while a commit is in progress")
        self._session = None

    # ========================================================================
    # Selections
    # ========================================================================

    async def change_destination_account(self, account: Account) -> MigrationSession:
        """Switch the destination account and refetch its instances."""
        session = self._require_phase(MigrationPhase.READY)

        session.destination_account = account
        session.destination_instances = None
        session.destination_instance = None
        session.confirmed = False
        self._refresh(session)

        self._enter(session, MigrationPhase.FETCHING_DEPENDENCIES)
        await self._load_destination_instances(session)

        if self._is_current(session) and session.phase is MigrationPhase.FETCHING_DEPENDENCIES:
            self._enter(session, MigrationPhase.READY)
        return session

    def select_destination_instance(self, key: int | str) -> Instance:
        """Select a destination instance by id or name and recompute the records."""
        session = self._require_phase(MigrationPhase.READY)

        instance = next(
            (
                i
                for i in session.destination_instances or []
                if str(i.id) == str(key) or i.name == key
            ),
            None,
        )
        if instance is None:
            raise self._reject(session, f"Unknown destination instance: {key}")

        # Hand edits are discarded here.
        session.destination_instance = instance
        self._refresh(session)
        return instance

    def set_destination_zone_name(self, name: str) -> None:
        session = self._require_phase(
            MigrationPhase.FETCHING_DEPENDENCIES, MigrationPhase.READY
        )
        session.destination_zone_name = name.strip()

    def set_confirmation(self, confirmed: bool = True) -> None:
        session = self._require_phase(
            MigrationPhase.FETCHING_DEPENDENCIES, MigrationPhase.READY
        )
        session.confirmed = confirmed

    def edit_record(self, record_id: int, data: str) -> ZoneRecord:
        """Overwrite a proposed record's data verbatim."""
        session = self._require_phase(MigrationPhase.READY)

        for index, record in enumerate(session.working_records):
            if record.id == record_id:
                edited = record.model_copy(update={"data": data})
                session.working_records[index] = edited
                return edited

        raise self._reject(session, f"Record {record_id} is not part of the transfer")

    # ========================================================================
    # Commit
    # ========================================================================

    async def commit(self) -> MigrationSession:
        """
        Apply the session to the provider.

        Raises MigrationValidationError (leaving the session ready) when a
        precondition fails. Provider errors end the session in the failed
        phase and are returned, not raised. Any other error also fails the
        session before it propagates, so the orchestrator can be reset.
        """
        session = self._require_phase(MigrationPhase.READY)
        plan = classify(session)

        if not session.destination_zone_name:
            raise self._reject(session, "Destination zone name is required")

        if plan.confirmation_required and not session.confirmed:
            raise self._reject(
                session, f"Confirmation required: {plan.confirmation_message}"
            )

        seed: ZoneRecord | None = None
        if plan.kind is not MigrationKind.CHANGE:
            seed = first_address_record(session.working_records)
            if seed is None:
                raise self._reject(session, "no address record; cannot create zone")

        session.kind = plan.kind
        session.last_error = None
        logger.info(
            "Committing %s of %s (%s) to %s (%s)",
            plan.kind.value,
            session.source_zone.name,
            session.source_account.name,
            session.destination_zone_name,
            session.destination_account.name,
        )

        try:
            if plan.kind is MigrationKind.CHANGE:
                await self._change(session)
            else:
                await self._copy(session, seed, move=plan.kind is MigrationKind.MOVE)
        except ZoneshiftError as e:
            self._fail(session, e)
            return session
        except Exception as e:
            self._fail(session, e)
            raise

        session.completed_at = datetime.utcnow()
        self._enter(session, MigrationPhase.COMPLETE)
        return session

    async def _copy(self, session: MigrationSession, seed: ZoneRecord, move: bool) -> None:
        destination = session.destination_account
        zone_name = session.destination_zone_name

        self._enter(session, MigrationPhase.CREATING_ZONE)
        if move and not await self.provider.probe_account_writable(destination.token):
            raise AccountReadOnlyError(f"Account {destination.name} is read-only")

        # The provider creates the seed A record along with the zone.
        zone = await self.provider.create_zone(
            destination.token, ZoneCreate(name=zone_name, ip_address=seed.data)
        )
        pending = [r for r in session.working_records if r is not seed]

        self._enter(session, MigrationPhase.TRANSFERRING_RECORDS)
        await self._run_steps(
            session,
            pending,
            lambda record: self.provider.create_zone_record(
                destination.token, zone_name, record
            ),
            "Created",
        )

        if move:
            self._enter(session, MigrationPhase.DELETING_SOURCE)
            await self.provider.delete_zone(
                session.source_account.token, session.source_zone.name
            )

        session.active_account = destination
        session.active_zone = zone

    async def _change(self, session: MigrationSession) -> None:
        account = session.source_account
        zone_name = session.source_zone.name
        records = [r for r in session.working_records if r.is_address]

        self._enter(session, MigrationPhase.TRANSFERRING_RECORDS)
        await self._run_steps(
            session,
            records,
            lambda record: self.provider.update_zone_record(
                account.token,
                zone_name,
                record.id,
                RecordUpdate(
                    record_type=record.record_type, name=record.name, data=record.data
                ),
            ),
            "Updated",
        )

    async def _run_steps(
        self,
        session: MigrationSession,
        records: list[ZoneRecord],
        step: Callable[[ZoneRecord], Awaitable[ZoneRecord]],
        verb: str,
    ) -> None:
        """Run one provider call per record, strictly in sequence."""
        total = len(records)
        self._report(session, MigrationProgress(total=total, message=f"0 of {total} records"))

        for completed, record in enumerate(records, start=1):
            await step(record)
            self._report(
                session,
                MigrationProgress(
                    completed=completed,
                    total=total,
                    message=(
                        f"{verb} {record.record_type} record {record.name} "
                        f"({completed} of {total})"
                    ),
                ),
            )

    # ========================================================================
    # Dependency fetching
    # ========================================================================

    async def _load_source_records(self, session: MigrationSession) -> None:
        records = await self._fetch(
            session,
            "record list",
            self.provider.list_zone_records(
                session.source_account.token, session.source_zone.name
            ),
        )
        if records is None:
            return

        session.original_records = records
        self._refresh(session)

    async def _load_source_instances(self, session: MigrationSession) -> None:
        instances = await self._fetch(
            session,
            "source instances",
            self.provider.list_instances(session.source_account.token),
        )
        if instances is None:
            return

        session.source_instances = instances
        self._refresh(session)
        await self._load_destination_instances(session)

    async def _load_destination_instances(self, session: MigrationSession) -> None:
        instances = await self._fetch(
            session,
            "destination instances",
            self.provider.list_instances(session.destination_account.token),
        )
        if instances is None:
            return

        session.destination_instances = instances
        self._refresh(session)

    async def _fetch(
        self, session: MigrationSession, what: str, request: Awaitable[T]
    ) -> T | None:
        """
        Await one dependency fetch for ``session``.

        Returns None when the fetch failed (the session is then failed) or when
        the session was replaced meanwhile. Errors that are not provider
        errors fail the session and propagate.
        """
        try:
            result = await request
        except ZoneshiftError as e:
            if self._is_current(session):
                self._fail(session, e)
            return None
        except Exception as e:
            if self._is_current(session):
                self._fail(session, e)
            raise

        if not self._is_current(session):
            logger.debug("Discarding stale %s for session %s", what, session.id)
            return None
        return result

    # ========================================================================
    # Internal helpers
    # ========================================================================

    def _refresh(self, session: MigrationSession) -> None:
        """Default the destination instance if possible, then re-derive records."""
        if (
            session.destination_instance is None
            and session.destination_instances
            and session.original_records is not None
        ):
            session.destination_instance = (
                find_owner(session.original_records, session.destination_instances)
                or session.destination_instances[0]
            )

        session.working_records = derive_working_records(
            session.original_records or [],
            session.source_instances or [],
            session.destination_instance,
        )

    def _is_current(self, session: MigrationSession) -> bool:
        return self._session is session

    def _require_session(self) -> MigrationSession:
        if not self._session:
            raise MigrationStateError("No migration session. Call open() first.")
        return self._session

    def _require_phase(self, *phases: MigrationPhase) -> MigrationSession:
        session = self._require_session()
        if session.phase not in phases:
            expected = ", ".join(p.value for p in phases)
            raise MigrationStateError(
                f"Migration session is {session.phase.value}, expected {expected}"
            )
        return session

    def _enter(self, session: MigrationSession, phase: MigrationPhase) -> None:
        logger.info("Session %s: %s -> %s", session.id, session.phase.value, phase.value)
        session.phase = phase

    def _report(self, session: MigrationSession, progress: MigrationProgress) -> None:
        session.progress = progress
        logger.info(progress.message)
        if self.on_progress:
            self.on_progress(session)

    def _fail(self, session: MigrationSession, error: Exception) -> None:
        session.last_error = str(error)
        logger.error("Migration of %s failed: %s", session.source_zone.name, error)
        self._enter(session, MigrationPhase.FAILED)

    def _reject(self, session: MigrationSession, message: str) -> MigrationValidationError:
        session.last_error = message
        logger.warning("Migration of %s rejected: %s", session.source_zone.name, message)
        return MigrationValidationError(message)
