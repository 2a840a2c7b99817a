"""
Parcel Store.

The only gateway between the application and the ``parcel`` table.
Every operation is a single statement in its own short transaction;
driver errors are re-raised as ``StorageError`` and never retried.

Address changes and deletion are gated on the row still being
``registered``. The gate lives in the WHERE clause, so a parcel that has
already been sent is left untouched without a prior read.
"""

import logging
from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from backend.app.core.exceptions import ParcelNotFoundError, StorageError
from backend.app.models.parcel import Parcel
from backend.app.models.parcel_enums import ParcelStatus

logger = logging.getLogger("parcel_tracker.store")

parcel_table = Parcel.__table__

# sqlite3 raises a bare OverflowError when binding out-of-range integers
DRIVER_ERRORS = (SQLAlchemyError, OverflowError)


class ParcelStore:
    """
    CRUD operations for the parcel table.

    Holds nothing but the session factory, which is bound to a pooled
    engine, so one store can be shared between threads.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def add(self, parcel: Parcel) -> int:
        """Insert a new row and return the number the database assigned."""
        stmt = insert(parcel_table).values(
            client=parcel.client,
            status=parcel.status,
            address=parcel.address,
            created_at=parcel.created_at,
        )

        try:
            with self.session_factory.begin() as session:
                result = session.execute(stmt)
                number = result.inserted_primary_key[0]
        except DRIVER_ERRORS as exc:
            raise StorageError("add", exc) from exc

        logger.debug("Parcel added", extra={"number": number, "client": parcel.client})
        return number

    def get(self, number: int) -> Parcel:
        """
        Fetch one parcel by number.

        Raises:
            ParcelNotFoundError: no row has this number
            StorageError: the query failed
        """
        try:
            with self.session_factory() as session:
                result = session.execute(
                    select(Parcel).where(Parcel.number == number)
                )
                parcel = result.scalar_one_or_none()
        except DRIVER_ERRORS as exc:
            raise StorageError("get", exc) from exc

        if parcel is None:
            raise ParcelNotFoundError(number)

        return parcel

    def get_by_client(self, client: int) -> List[Parcel]:
        """Return every parcel of a client in insertion order; empty list if none."""
        try:
            with self.session_factory() as session:
                result = session.execute(
                    select(Parcel)
                    .where(Parcel.client == client)
                    .order_by(Parcel.number)
                )
                parcels = list(result.scalars().all())
        except DRIVER_ERRORS as exc:
            raise StorageError("get_by_client", exc) from exc

        return parcels

    def set_status(self, number: int, status: str) -> None:
        stmt = (
            update(parcel_table)
            .where(parcel_table.c.number == number)
            .values(status=status)
        )
        self._execute_write("set_status", number, stmt)

    def set_address(self, number: int, address: str) -> None:
        """Change the address; silently does nothing unless the parcel is registered."""
        stmt = (
            update(parcel_table)
            .where(
                parcel_table.c.number == number,
                parcel_table.c.status == ParcelStatus.REGISTERED.value,
            )
            .values(address=address)
        )
        self._execute_write("set_address", number, stmt)

    def delete(self, number: int) -> None:
        """Remove the row; silently does nothing unless the parcel is registered."""
        stmt = delete(parcel_table).where(
            parcel_table.c.number == number,
            parcel_table.c.status == ParcelStatus.REGISTERED.value,
        )
        self._execute_write("delete", number, stmt)

    def _execute_write(self, operation: str, number: int, stmt) -> int:
        try:
            with self.session_factory.begin() as session:
                rowcount = session.execute(stmt).rowcount
        except DRIVER_ERRORS as exc:
            raise StorageError(operation, exc) from exc

        logger.debug(
            "Parcel write executed",
            extra={"operation": operation, "number": number, "rows_affected": rowcount}
        )
        return rowcount
