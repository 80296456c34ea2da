"""Core data models for zoneshift."""

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RecordType(str, Enum):
    """DNS record types understood by the provider."""

    A = "A"
    AAAA = "AAAA"
    CAA = "CAA"
    CNAME = "CNAME"
    MX = "MX"
    NS = "NS"
    SOA = "SOA"
    SRV = "SRV"
    TXT = "TXT"


# Records whose data is an instance address and gets remapped.
ADDRESS_RECORD_TYPES = frozenset({RecordType.A.value, RecordType.AAAA.value})

# Delegation records are managed by the provider and never transferred.
EXCLUDED_RECORD_TYPES = frozenset({RecordType.NS.value})

PUBLIC_VISIBILITY = "public"


class ListKind(str, Enum):
    """Address family of an instance network list."""

    V4 = "v4"
    V6 = "v6"


class MigrationKind(str, Enum):
    """What a commit does to the zone."""

    COPY = "copy"
    MOVE = "move"
    CHANGE = "change"


class MigrationPhase(str, Enum):
    """Migration session states."""

    IDLE = "idle"
    FETCHING_DEPENDENCIES = "fetching_dependencies"
    READY = "ready"
    CREATING_ZONE = "creating_zone"
    TRANSFERRING_RECORDS = "transferring_records"
    DELETING_SOURCE = "deleting_source"
    COMPLETE = "complete"
    FAILED = "failed"


COMMITTING_PHASES = frozenset(
    {
        MigrationPhase.CREATING_ZONE,
        MigrationPhase.TRANSFERRING_RECORDS,
        MigrationPhase.DELETING_SOURCE,
    }
)


# ============================================================================
# Account Models
# ============================================================================


class AccountInfo(BaseModel):
    """Account details as reported by the provider."""

    uuid: str | None = None
    email: str | None = None
    email_verified: bool = False
    status: str | None = None
    status_message: str | None = None
    droplet_limit: int | None = None


class Account(BaseModel):
    """Provider account and its API token."""

    name: str
    token: str = Field(..., repr=False, exclude=True)
    info: AccountInfo | None = None
    error: str | None = None


# ============================================================================
# Zone Models
# ============================================================================


class Zone(BaseModel):
    """DNS zone (a provider "domain")."""

    name: str
    ttl: int | None = None
    zone_file: str | None = None


class ZoneCreate(BaseModel):
    """Payload for creating a zone with its initial A record."""

    name: str
    ip_address: str


class ZoneRecord(BaseModel):
    """Single resource record inside a zone."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    record_type: str = Field(..., alias="type")
    name: str
    data: str
    priority: int | None = None  # MX, SRV
    port: int | None = None  # SRV
    weight: int | None = None  # SRV
    ttl: int | None = None
    flags: int | None = None  # CAA
    tag: str | None = None  # CAA

    @property
    def is_address(self) -> bool:
        return self.record_type in ADDRESS_RECORD_TYPES


class RecordUpdate(BaseModel):
    """Partial record update; unset or empty fields are left alone server side."""

    model_config = ConfigDict(populate_by_name=True)

    record_type: str | None = Field(default=None, alias="type")
    name: str | None = None
    data: str | None = None
    priority: int | None = None
    port: int | None = None
    weight: int | None = None
    ttl: int | None = None


# ============================================================================
# Instance Models
# ============================================================================


class NetworkInterface(BaseModel):
    """Address attached to an instance."""

    model_config = ConfigDict(populate_by_name=True)

    address: str = Field(..., alias="ip_address")
    visibility: str = Field(..., alias="type")  # public, private


class NetworkSet(BaseModel):
    """Ordered v4 and v6 interface lists of an instance."""

    v4: list[NetworkInterface] = Field(default_factory=list)
    v6: list[NetworkInterface] = Field(default_factory=list)


class Instance(BaseModel):
    """Compute instance (a provider "droplet")."""

    id: int
    name: str
    networks: NetworkSet = Field(default_factory=NetworkSet)


class AddressMatch(BaseModel):
    """Where an address was found in a list of instances."""

    instance_index: int
    list_kind: ListKind
    position: int


# ============================================================================
# Migration Models
# ============================================================================


class MigrationPlan(BaseModel):
    """Classification of the pending commit."""

    kind: MigrationKind
    committable: bool
    confirmation_required: bool = False
    confirmation_message: str | None = None


class MigrationProgress(BaseModel):
    """Progress through the record transfer steps."""

    completed: int = 0
    total: int = 0
    message: str = ""


class MigrationSession(BaseModel):
    """Working state of one migration attempt."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    phase: MigrationPhase = MigrationPhase.IDLE
    kind: MigrationKind | None = None

    source_account: Account
    source_zone: Zone
    source_instances: list[Instance] | None = None
    original_records: list[ZoneRecord] | None = None

    destination_account: Account
    destination_zone_name: str = ""
    destination_instances: list[Instance] | None = None
    destination_instance: Instance | None = None

    working_records: list[ZoneRecord] = Field(default_factory=list)
    confirmed: bool = False
    progress: MigrationProgress = Field(default_factory=MigrationProgress)
    last_error: str | None = None

    active_account: Account | None = None
    active_zone: Zone | None = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: datetime | None = None
