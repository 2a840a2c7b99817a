"""
Parcel API Endpoints.

Thin HTTP surface over the parcel service. Gated operations answer with
the parcel as stored afterwards, so callers can see whether the change
took effect.
"""

from fastapi import APIRouter, Depends, Path, Response, status
from backend.app.core.dependencies import get_parcel_service
from backend.app.schemas.parcel import (
    MAX_ROW_ID,
    ParcelAddressUpdate,
    ParcelCreate,
    ParcelListResponse,
    ParcelResponse,
    ParcelStatusUpdate,
)
from backend.app.services.parcel_service import ParcelService

router = APIRouter(prefix="/parcels", tags=["Parcels"])


@router.post("", response_model=ParcelResponse, status_code=status.HTTP_201_CREATED)
def register_parcel(
    parcel_data: ParcelCreate,
    service: ParcelService = Depends(get_parcel_service)
):
    """Register a new parcel for a client."""
    parcel = service.register(parcel_data.client, parcel_data.address)
    return ParcelResponse.model_validate(parcel)


@router.get("/client/{client}", response_model=ParcelListResponse)
def list_client_parcels(
    client: int = Path(..., ge=0, le=MAX_ROW_ID, description="Client ID"),
    service: ParcelService = Depends(get_parcel_service)
):
    parcels = service.client_parcels(client)
    return ParcelListResponse(
        parcels=[ParcelResponse.model_validate(p) for p in parcels],
        total=len(parcels)
    )


@router.get("/{number}", response_model=ParcelResponse)
def get_parcel(
    number: int = Path(..., ge=0, le=MAX_ROW_ID, description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Get a single parcel.
    
    Returns 404 (ERR_NOT_FOUND_001) when the number is unknown.
    """
    return ParcelResponse.model_validate(service.get(number))


@router.patch("/{number}/status", response_model=ParcelResponse)
def set_parcel_status(
    status_data: ParcelStatusUpdate,
    number: int = Path(..., ge=0, le=MAX_ROW_ID, description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """Set the status unconditionally."""
    service.set_status(number, status_data.status)
    return ParcelResponse.model_validate(service.get(number))


@router.post("/{number}/advance", response_model=ParcelResponse)
def advance_parcel(
    number: int = Path(..., ge=0, le=MAX_ROW_ID, description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """Move the parcel to the next status on its route."""
    service.next_status(number)
    return ParcelResponse.model_validate(service.get(number))


@router.patch("/{number}/address", response_model=ParcelResponse)
def change_parcel_address(
    address_data: ParcelAddressUpdate,
    number: int = Path(..., ge=0, le=MAX_ROW_ID, description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """
    Change the delivery address.
    
    Only registered parcels are updated; otherwise the stored parcel is
    returned unchanged.
    """
    service.change_address(number, address_data.address)
    return ParcelResponse.model_validate(service.get(number))


@router.delete("/{number}", status_code=status.HTTP_204_NO_CONTENT)
def delete_parcel(
    number: int = Path(..., ge=0, le=MAX_ROW_ID, description="Parcel number"),
    service: ParcelService = Depends(get_parcel_service)
):
    """Delete a registered parcel. Parcels already on their way are kept."""
    service.delete(number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
