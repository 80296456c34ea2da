"""Zone migration engine: address remapping, classification and orchestration."""

from zoneshift.core.migrate.addresses import find_owner, locate, public_addresses
from zoneshift.core.migrate.orchestrator import MigrationOrchestrator
from zoneshift.core.migrate.planner import classify
from zoneshift.core.migrate.remapper import (
    derive_working_records,
    first_address_record,
    remap,
)

__all__ = [
    "MigrationOrchestrator",
    "classify",
    "derive_working_records",
    "find_owner",
    "first_address_record",
    "locate",
    "public_addresses",
    "remap",
]
