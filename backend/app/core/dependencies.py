"""
Store and service dependencies for FastAPI.

Tests swap the database by overriding ``get_parcel_store``.
"""

from fastapi import Depends
from backend.app.db.session import SessionLocal
from backend.app.repositories.parcel_store import ParcelStore
from backend.app.services.parcel_service import ParcelService


def get_parcel_store() -> ParcelStore:
    """FastAPI dependency returning a store bound to the application engine."""
    return ParcelStore(SessionLocal)


def get_parcel_service(store: ParcelStore = Depends(get_parcel_store)) -> ParcelService:
    return ParcelService(store)
