"""Pydantic schemas for Gemstone model."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class GemstoneBase(BaseModel):
    """Base Gemstone schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    weight_carat: Decimal | None = Field(None, ge=0)
    dimensions_mm: str | None = Field(None, max_length=100)
    color: str | None = Field(None, max_length=100)
    treatment: str | None = Field(None, max_length=255)
    origin: str | None = Field(None, max_length=255)
    photo_url: str | None = Field(None, max_length=500)


class GemstoneCreate(GemstoneBase):
    """Schema for registering a new gemstone."""

    pass


class GemstoneUpdate(BaseModel):
    """Schema for updating an existing gemstone."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    weight_carat: Decimal | None = Field(None, ge=0)
    dimensions_mm: str | None = Field(None, max_length=100)
    color: str | None = Field(None, max_length=100)
    treatment: str | None = Field(None, max_length=255)
    origin: str | None = Field(None, max_length=255)
    photo_url: str | None = Field(None, max_length=500)


class Gemstone(GemstoneBase):
    """Schema for Gemstone responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    unique_id_number: str
    qr_code_data_url: str | None = None
    created_at: datetime
    updated_at: datetime


class GemstoneVerification(Gemstone):
    """Public certificate lookup result."""

    verified: bool = True
    verification_timestamp: datetime
