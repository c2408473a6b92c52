"""Pydantic schemas for gemstone ownership records."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from gemvault.services.shared.date_utils import parse_calendar_date


class OwnerFields(BaseModel):
    """Contact fields and ownership dates shared by add and update."""

    owner_name: str = Field(..., min_length=1, max_length=255)
    owner_phone: str = Field(..., min_length=1, max_length=50)
    owner_email: EmailStr | None = None
    owner_address: str | None = None
    ownership_start_date: date | None = None
    ownership_end_date: date | None = None
    notes: str | None = None

    @field_validator("owner_name", "owner_phone", mode="before")
    @classmethod
    def strip_required_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("owner_email", "owner_address", "notes", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Forms submit empty strings for untouched optional inputs."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("ownership_start_date", "ownership_end_date", mode="before")
    @classmethod
    def calendar_date(cls, v):
        """Accept timestamps but keep only their calendar date."""
        return parse_calendar_date(v)


class OwnerCreate(OwnerFields):
    """Schema for adding an owner; a transfer makes the new owner current."""

    is_transfer: bool = False


class OwnerUpdate(OwnerFields):
    """Schema for updating an owner."""

    pass


class Owner(BaseModel):
    """Schema for ownership record responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    gemstone_id: int
    owner_name: str
    owner_phone: str
    owner_email: str | None = None
    owner_address: str | None = None
    ownership_start_date: date
    ownership_end_date: date | None = None
    is_current_owner: bool
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class PublicOwner(BaseModel):
    """Ownership history entry shown on the public certificate page."""

    model_config = ConfigDict(from_attributes=True)

    owner_name: str
    ownership_start_date: date
    ownership_end_date: date | None = None
    is_current_owner: bool


class OwnerContact(BaseModel):
    """Owner contact details offered as a template for new records."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_name: str
    owner_phone: str
    owner_email: str | None = None
    owner_address: str | None = None
    notes: str | None = None


class OwnerUpdateResult(Owner):
    """Updated owner plus neighbours changed by a server-side cascade."""

    cascaded_owner_ids: list[int] = []
