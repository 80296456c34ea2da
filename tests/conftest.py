"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock

import pytest

from zoneshift.core.base import BaseProviderClient
from zoneshift.core.models import (
    Account,
    Instance,
    NetworkInterface,
    NetworkSet,
    Zone,
    ZoneRecord,
)


@pytest.fixture
def make_instance():
    """Factory for instances with public (and optionally private) addresses."""

    def _make(
        instance_id: int,
        name: str,
        v4: tuple[str, ...] = (),
        v6: tuple[str, ...] = (),
        private_v4: tuple[str, ...] = (),
    ) -> Instance:
        return Instance(
            id=instance_id,
            name=name,
            networks=NetworkSet(
                v4=[NetworkInterface(address=a, visibility="private") for a in private_v4]
                + [NetworkInterface(address=a, visibility="public") for a in v4],
                v6=[NetworkInterface(address=a, visibility="public") for a in v6],
            ),
        )

    return _make


@pytest.fixture
def make_record():
    """Factory for zone records."""

    def _make(record_id: int, record_type: str, data: str, name: str = "@", **extra) -> ZoneRecord:
        return ZoneRecord(id=record_id, record_type=record_type, name=name, data=data, **extra)

    return _make


@pytest.fixture
def source_account() -> Account:
    return Account(name="personal", token="tok-personal")


@pytest.fixture
def other_account() -> Account:
    return Account(name="work", token="tok-work")


@pytest.fixture
def foo_zone() -> Zone:
    return Zone(name="foo.com", ttl=1800)


@pytest.fixture
def src_instance(make_instance) -> Instance:
    return make_instance(10, "src", v4=("1.1.1.1",))


@pytest.fixture
def dst_instance(make_instance) -> Instance:
    return make_instance(20, "dst", v4=("2.2.2.2",))


@pytest.fixture
def foo_records(make_record) -> list[ZoneRecord]:
    """Source zone records: one A record and the provider's NS record."""
    return [
        make_record(1, "A", "1.1.1.1"),
        make_record(2, "NS", "ns1"),
    ]


@pytest.fixture
def provider(src_instance, dst_instance, foo_records) -> AsyncMock:
    """Mock provider: "personal" owns src, "work" owns dst."""
    mock = AsyncMock(spec=BaseProviderClient)

    instances = {"tok-personal": [src_instance], "tok-work": [dst_instance]}
    mock.list_instances.side_effect = lambda token: instances[token]
    mock.list_zone_records.return_value = foo_records
    mock.probe_account_writable.return_value = True
    mock.create_zone.side_effect = lambda token, zone: Zone(name=zone.name)
    mock.create_zone_record.side_effect = lambda token, zone_name, record: record
    mock.update_zone_record.side_effect = (
        lambda token, zone_name, record_id, update: ZoneRecord(
            id=record_id,
            record_type=update.record_type,
            name=update.name,
            data=update.data,
        )
    )
    mock.delete_zone.return_value = None
    return mock
