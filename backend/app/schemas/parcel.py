"""
Parcel Pydantic schemas.

Defines request and response models for the parcel API.
"""

from pydantic import BaseModel, Field
from typing import List

# Largest value a 64-bit INTEGER column can hold
MAX_ROW_ID = 2**63 - 1


class ParcelCreate(BaseModel):
    """Schema for registering a new parcel."""
    client: int = Field(..., ge=0, le=MAX_ROW_ID, description="Owning client identifier")
    address: str = Field(..., min_length=1, description="Delivery address")


class ParcelStatusUpdate(BaseModel):
    """Schema for setting a parcel status."""
    status: str = Field(..., min_length=1, max_length=128, description="New status value")


class ParcelAddressUpdate(BaseModel):
    """Schema for changing the delivery address of a registered parcel."""
    address: str = Field(..., min_length=1, description="New delivery address")


class ParcelResponse(BaseModel):
    """Schema for parcel response."""
    number: int
    client: int
    status: str
    address: str
    created_at: str
    
    class Config:
        from_attributes = True


class ParcelListResponse(BaseModel):
    """Schema for a client's parcels."""
    parcels: List[ParcelResponse]
    total: int
