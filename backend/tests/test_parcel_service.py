"""
Parcel service tests.

Registration, status progression and the gated workflows built on the
store.
"""

from datetime import datetime

import pytest

from backend.app.core.exceptions import ParcelNotFoundError
from backend.app.models.parcel_enums import ParcelStatus
from backend.app.services.parcel_service import utc_timestamp


def test_register_creates_registered_parcel(service, store):
    parcel = service.register(1000, "Main st. 1")
    
    assert parcel.number is not None
    assert parcel.status == ParcelStatus.REGISTERED
    
    stored = store.get(parcel.number)
    assert stored.client == 1000
    assert stored.address == "Main st. 1"
    assert stored.created_at == parcel.created_at


def test_utc_timestamp_format():
    stamp = utc_timestamp()
    
    assert stamp.endswith("Z")
    datetime.strptime(stamp, "%Y-%m-%dT%H:%M:%SZ")


def test_next_status_walks_the_route(service, store):
    number = service.register(1, "a").number
    
    assert service.next_status(number) == ParcelStatus.SENT
    assert store.get(number).status == ParcelStatus.SENT
    
    assert service.next_status(number) == ParcelStatus.DELIVERED
    assert store.get(number).status == ParcelStatus.DELIVERED


def test_next_status_stops_at_delivered(service, store):
    number = service.register(1, "a").number
    store.set_status(number, ParcelStatus.DELIVERED.value)
    
    assert service.next_status(number) == ParcelStatus.DELIVERED
    assert store.get(number).status == ParcelStatus.DELIVERED


def test_next_status_missing_parcel(service):
    with pytest.raises(ParcelNotFoundError):
        service.next_status(424242)


def test_change_address_only_while_registered(service, store):
    number = service.register(1, "first").number
    
    service.change_address(number, "second")
    assert store.get(number).address == "second"
    
    service.next_status(number)
    service.change_address(number, "third")
    assert store.get(number).address == "second"


def test_delete_only_while_registered(service, store):
    kept = service.register(1, "a").number
    removed = service.register(1, "b").number
    service.next_status(kept)
    
    service.delete(kept)
    service.delete(removed)
    
    assert [p.number for p in service.client_parcels(1)] == [kept]


def test_client_parcels(service):
    first = service.register(7, "a")
    second = service.register(7, "b")
    service.register(8, "c")
    
    parcels = service.client_parcels(7)
    
    assert [p.number for p in parcels] == [first.number, second.number]
