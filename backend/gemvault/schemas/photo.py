"""Pydantic schemas for gemstone gallery photos."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(v):
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


class PhotoCreate(BaseModel):
    """Add a gallery photo by URL."""

    photo_url: str = Field(..., min_length=1, max_length=500)
    caption: str | None = None

    @field_validator("photo_url", mode="before")
    @classmethod
    def strip_url(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("caption", mode="before")
    @classmethod
    def blank_caption(cls, v):
        return _blank_to_none(v)


class PhotoUpdate(BaseModel):
    """Only the caption of a photo can be edited; a blank caption clears it."""

    caption: str | None = None

    @field_validator("caption", mode="before")
    @classmethod
    def blank_caption(cls, v):
        return _blank_to_none(v)


class PublicPhoto(BaseModel):
    """Gallery entry as shown on the public certificate page."""

    id: int
    photo_url: str
    caption: str | None = None
    uploaded_by: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class Photo(PublicPhoto):
    gemstone_id: int
    updated_at: datetime | None = None
