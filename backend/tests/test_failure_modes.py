"""
Failure Injection Tests.

Validates that driver errors surface as StorageError, chained to the
original exception, and are never mistaken for a missing parcel.
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from backend.app.core.exceptions import ParcelNotFoundError, StorageError
from backend.app.models.parcel import Parcel
from backend.app.repositories.parcel_store import ParcelStore


def test_constraint_violation_is_storage_error(store):
    """NOT NULL violation on insert is reported, not swallowed."""
    parcel = Parcel(client=None, status="registered", address="test", created_at="2024-01-01T00:00:00Z")
    
    with pytest.raises(StorageError) as exc_info:
        store.add(parcel)
    
    assert exc_info.value.operation == "add"
    assert isinstance(exc_info.value.__cause__, IntegrityError)
    assert exc_info.value.error_code == "ERR_STORAGE_001"


@pytest.mark.parametrize("call", [
    lambda s: s.add(Parcel(client=1, status="registered", address="a", created_at="t")),
    lambda s: s.get(1),
    lambda s: s.get_by_client(1),
    lambda s: s.set_status(1, "sent"),
    lambda s: s.set_address(1, "b"),
    lambda s: s.delete(1),
])
def test_missing_table_is_storage_error(broken_store, call):
    with pytest.raises(StorageError) as exc_info:
        call(broken_store)
    
    assert not isinstance(exc_info.value, ParcelNotFoundError)
    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert "no such table" in exc_info.value.details["reason"]


def test_storage_error_is_not_retried(mocker):
    """A failing statement is executed exactly once."""
    session = mocker.MagicMock()
    session.execute.side_effect = OperationalError("UPDATE parcel", {}, Exception("database is locked"))
    
    factory = mocker.MagicMock()
    factory.begin.return_value.__enter__.return_value = session
    
    with pytest.raises(StorageError):
        ParcelStore(factory).set_status(1, "sent")
    
    assert session.execute.call_count == 1


TOO_LARGE = 2**64


@pytest.mark.parametrize("operation, call", [
    ("add", lambda s: s.add(Parcel(client=TOO_LARGE, status="registered", address="a", created_at="t"))),
    ("get", lambda s: s.get(TOO_LARGE)),
    ("get_by_client", lambda s: s.get_by_client(TOO_LARGE)),
    ("set_status", lambda s: s.set_status(TOO_LARGE, "sent")),
    ("set_address", lambda s: s.set_address(TOO_LARGE, "b")),
    ("delete", lambda s: s.delete(TOO_LARGE)),
])
def test_out_of_range_integer_is_storage_error(store, operation, call):
    """Integers the driver cannot bind are storage failures, not crashes or NotFound."""
    with pytest.raises(StorageError) as exc_info:
        call(store)
    
    assert not isinstance(exc_info.value, ParcelNotFoundError)
    assert exc_info.value.operation == operation
    assert exc_info.value.__cause__ is not None
