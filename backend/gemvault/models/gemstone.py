"""Gemstone model - a registered stone with its certificate identifiers."""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from gemvault.database import Base

if TYPE_CHECKING:
    from gemvault.models.gemstone_owner import GemstoneOwner
    from gemvault.models.gemstone_photo import GemstonePhoto


class Gemstone(Base):
    """Gemstone record with unique certificate number and QR code."""

    __tablename__ = "gemstones"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    unique_id_number: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    weight_carat: Mapped[Decimal | None] = mapped_column(Numeric(10, 3))
    dimensions_mm: Mapped[str | None] = mapped_column(String(100))
    color: Mapped[str | None] = mapped_column(String(100))
    treatment: Mapped[str | None] = mapped_column(String(255))
    origin: Mapped[str | None] = mapped_column(String(255))
    photo_url: Mapped[str | None] = mapped_column(String(500))
    qr_code_data_url: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    # Relationships
    owners: Mapped[list["GemstoneOwner"]] = relationship(
        back_populates="gemstone", cascade="all, delete-orphan"
    )
    photos: Mapped[list["GemstonePhoto"]] = relationship(
        back_populates="gemstone", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Gemstone(id={self.id}, unique_id='{self.unique_id_number}')>"
