"""Core library modules for zone migration."""

from zoneshift.core.models import (
    Account,
    Instance,
    MigrationKind,
    MigrationPhase,
    MigrationPlan,
    MigrationSession,
    RecordType,
    Zone,
    ZoneRecord,
)

__all__ = [
    "Account",
    "Instance",
    "MigrationKind",
    "MigrationPhase",
    "MigrationPlan",
    "MigrationSession",
    "RecordType",
    "Zone",
    "ZoneRecord",
]
