"""Abstract base class defining the provider interface."""

from abc import ABC, abstractmethod

from zoneshift.core.models import (
    AccountInfo,
    Instance,
    RecordUpdate,
    Zone,
    ZoneCreate,
    ZoneRecord,
)


class BaseProviderClient(ABC):
    """
    Abstract base class for hosting provider clients.

    Every operation takes the account token explicitly so one client can
    serve both sides of a migration.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying HTTP session."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the underlying HTTP session."""
        ...

    # ========================================================================
    # Account
    # ========================================================================

    @abstractmethod
    async def get_account(self, token: str) -> AccountInfo:
        """Fetch details of the account owning the token."""
        ...

    @abstractmethod
    async def probe_account_writable(self, token: str) -> bool:
        """Report whether the token may modify resources."""
        ...

    # ========================================================================
    # Instances
    # ========================================================================

    @abstractmethod
    async def list_instances(self, token: str) -> list[Instance]:
        """List every compute instance of the account."""
        ...

    # ========================================================================
    # Zones
    # ========================================================================

    @abstractmethod
    async def list_zones(self, token: str) -> list[Zone]:
        """List every zone of the account."""
        ...

    @abstractmethod
    async def create_zone(self, token: str, zone: ZoneCreate) -> Zone:
        """Create a zone together with its initial A record."""
        ...

    @abstractmethod
    async def delete_zone(self, token: str, zone_name: str) -> None:
        """Delete a zone and all of its records."""
        ...

    # ========================================================================
    # Records
    # ========================================================================

    @abstractmethod
    async def list_zone_records(self, token: str, zone_name: str) -> list[ZoneRecord]:
        """List every record of a zone."""
        ...

    @abstractmethod
    async def create_zone_record(
        self, token: str, zone_name: str, record: ZoneRecord
    ) -> ZoneRecord:
        """Create a copy of a record inside a zone."""
        ...

    @abstractmethod
    async def update_zone_record(
        self, token: str, zone_name: str, record_id: int, update: RecordUpdate
    ) -> ZoneRecord:
        """Update the non-empty fields of an existing record."""
        ...
