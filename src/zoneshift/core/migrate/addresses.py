"""Lookup of record addresses in instance network lists."""

from collections.abc import Iterable, Sequence

from zoneshift.core.models import (
    PUBLIC_VISIBILITY,
    AddressMatch,
    Instance,
    ListKind,
    ZoneRecord,
)


def public_addresses(instance: Instance, kind: ListKind) -> list[str]:
    """Public addresses of one family, in the order the provider lists them."""
    interfaces = instance.networks.v4 if kind is ListKind.V4 else instance.networks.v6
    return [i.address for i in interfaces if i.visibility == PUBLIC_VISIBILITY]


def locate(address: str, instances: Sequence[Instance]) -> AddressMatch | None:
    """
    Find which instance owns a public address, and at which position.

    Instances are searched in the given order; v4 is checked before v6 for
    each instance. Returns None when no instance has the address.
    """
    for index, instance in enumerate(instances):
        for kind in (ListKind.V4, ListKind.V6):
            addresses = public_addresses(instance, kind)
            if address in addresses:
                return AddressMatch(
                    instance_index=index,
                    list_kind=kind,
                    position=addresses.index(address),
                )
    return None


def find_owner(
    records: Iterable[ZoneRecord], instances: Sequence[Instance]
) -> Instance | None:
    """First instance whose public addresses include any A/AAAA record's data."""
    addresses = {r.data for r in records if r.is_address}
    for instance in instances:
        owned = public_addresses(instance, ListKind.V4) + public_addresses(
            instance, ListKind.V6
        )
        if addresses.intersection(owned):
            return instance
    return None
