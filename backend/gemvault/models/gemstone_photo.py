"""GemstonePhoto model - one image in a gemstone's gallery."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from gemvault.database import Base

if TYPE_CHECKING:
    from gemvault.models.gemstone import Gemstone


class GemstonePhoto(Base):
    """Gallery entry. The image itself lives elsewhere; only its URL is stored."""

    __tablename__ = "gemstone_photos"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    gemstone_id: Mapped[int] = mapped_column(
        ForeignKey("gemstones.id", ondelete="CASCADE"), index=True
    )
    photo_url: Mapped[str] = mapped_column(String(500))
    caption: Mapped[str | None] = mapped_column(Text)
    uploaded_by: Mapped[str | None] = mapped_column(String(50))
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    # Relationships
    gemstone: Mapped["Gemstone"] = relationship(back_populates="photos")

    def __repr__(self) -> str:
        return f"<GemstonePhoto(id={self.id}, gemstone_id={self.gemstone_id})>"
