"""
Parcel service.

Application-level workflows on top of the Parcel Store: registering a
parcel, moving it along its delivery route, and the gated address change
and deletion.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List

from backend.app.models.parcel import Parcel
from backend.app.models.parcel_enums import ParcelStatus
from backend.app.repositories.parcel_store import ParcelStore

logger = logging.getLogger("parcel_tracker.service")

NEXT_STATUS: Dict[str, str] = {
    ParcelStatus.REGISTERED.value: ParcelStatus.SENT.value,
    ParcelStatus.SENT.value: ParcelStatus.DELIVERED.value,
}


def utc_timestamp() -> str:
    """Current UTC time as RFC 3339 text with second precision."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class ParcelService:
    def __init__(self, store: ParcelStore):
        self.store = store

    def register(self, client: int, address: str) -> Parcel:
        """Create a parcel in the registered state and return it with its number."""
        parcel = Parcel(
            client=client,
            status=ParcelStatus.REGISTERED.value,
            address=address,
            created_at=utc_timestamp(),
        )
        parcel.number = self.store.add(parcel)
        
        logger.info(
            "Parcel registered",
            extra={"number": parcel.number, "client": client, "created_at": parcel.created_at}
        )
        return parcel

    def get(self, number: int) -> Parcel:
        return self.store.get(number)

    def client_parcels(self, client: int) -> List[Parcel]:
        return self.store.get_by_client(client)

    def set_status(self, number: int, status: str) -> None:
        self.store.set_status(number, status)
        logger.info("Parcel status set", extra={"number": number, "to_status": status})

    def next_status(self, number: int) -> str:
        """
        Advance the parcel one step: registered → sent → delivered.
        
        Delivered (or any status outside the known route) is terminal and
        returned unchanged.
        
        Raises:
            ParcelNotFoundError: the parcel does not exist
        """
        parcel = self.store.get(number)
        
        new_status = NEXT_STATUS.get(parcel.status)
        if new_status is None:
            logger.info(
                "Parcel status is terminal",
                extra={"number": number, "status": parcel.status}
            )
            return parcel.status
        
        self.store.set_status(number, new_status)
        
        logger.info(
            "Parcel status changed",
            extra={"number": number, "from_status": parcel.status, "to_status": new_status}
        )
        return new_status

    def change_address(self, number: int, address: str) -> None:
        self.store.set_address(number, address)
        logger.info("Parcel address change requested", extra={"number": number})

    def delete(self, number: int) -> None:
        self.store.delete(number)
        logger.info("Parcel deletion requested", extra={"number": number})
