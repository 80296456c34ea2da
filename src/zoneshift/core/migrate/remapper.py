"""Rewrite address records to point at a destination instance."""

from collections.abc import Iterable, Sequence

from zoneshift.core.migrate.addresses import locate, public_addresses
from zoneshift.core.models import (
    EXCLUDED_RECORD_TYPES,
    Instance,
    RecordType,
    ZoneRecord,
)


def remap(
    record: ZoneRecord,
    source_instances: Sequence[Instance],
    destination: Instance,
) -> ZoneRecord:
    """
    Map a record's address onto the same slot of the destination instance.

    The slot is the address's position in the owning source instance's
    public list of the same family. When the destination has fewer public
    addresses, the last one is used. Records that are not A/AAAA, whose
    address belongs to no source instance, or whose family the destination
    lacks are returned unchanged.
    """
    if not record.is_address:
        return record

    match = locate(record.data, source_instances)
    if match is None:
        return record

    candidates = public_addresses(destination, match.list_kind)
    if not candidates:
        return record

    index = min(match.position, len(candidates) - 1)
    return record.model_copy(update={"data": candidates[index]})


def derive_working_records(
    records: Iterable[ZoneRecord],
    source_instances: Sequence[Instance],
    destination: Instance | None,
) -> list[ZoneRecord]:
    """Transferable records, remapped onto ``destination`` when one is selected."""
    transferable = [r for r in records if r.record_type not in EXCLUDED_RECORD_TYPES]
    if destination is None:
        return transferable
    return [remap(r, source_instances, destination) for r in transferable]


def first_address_record(records: Iterable[ZoneRecord]) -> ZoneRecord | None:
    """The first A record, used as a new zone's initial address."""
    return next((r for r in records if r.record_type == RecordType.A.value), None)
