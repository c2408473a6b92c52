"""GemstoneOwner model - one ownership interval of a gemstone."""

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from gemvault.database import Base

if TYPE_CHECKING:
    from gemvault.models.gemstone import Gemstone


class GemstoneOwner(Base):
    """Ownership record. An open interval has no end date and is the current owner."""

    __tablename__ = "gemstone_owners"
    __table_args__ = (
        Index("idx_gemstone_owners_gemstone_start", "gemstone_id", "ownership_start_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    gemstone_id: Mapped[int] = mapped_column(ForeignKey("gemstones.id", ondelete="CASCADE"))
    owner_name: Mapped[str] = mapped_column(String(255))
    owner_phone: Mapped[str] = mapped_column(String(50))
    owner_email: Mapped[str | None] = mapped_column(String(255))
    owner_address: Mapped[str | None] = mapped_column(Text)
    ownership_start_date: Mapped[date] = mapped_column(Date)
    ownership_end_date: Mapped[date | None] = mapped_column(Date)
    is_current_owner: Mapped[bool] = mapped_column(Boolean, default=False)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    # Relationships
    gemstone: Mapped["Gemstone"] = relationship(back_populates="owners")

    def __repr__(self) -> str:
        return (
            f"<GemstoneOwner(id={self.id}, gemstone_id={self.gemstone_id}, "
            f"name='{self.owner_name}', current={self.is_current_owner})>"
        )
