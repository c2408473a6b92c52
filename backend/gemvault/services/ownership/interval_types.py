"""Value objects for ownership interval management."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from gemvault.services.shared.date_utils import parse_calendar_date, to_iso_date


@dataclass(frozen=True)
class OwnershipRecord:
    """One interval during which a named owner held a gemstone."""

    id: int | str
    ownership_start_date: date
    ownership_end_date: date | None = None
    is_current_owner: bool = False
    owner_name: str = ""
    owner_phone: str = ""
    owner_email: str | None = None
    owner_address: str | None = None
    notes: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "OwnershipRecord":
        """Build a record from an API payload, trimming timestamps to dates."""
        return cls(
            id=data["id"],
            ownership_start_date=parse_calendar_date(data["ownership_start_date"]),
            ownership_end_date=parse_calendar_date(data.get("ownership_end_date")),
            is_current_owner=bool(data.get("is_current_owner")),
            owner_name=data.get("owner_name") or "",
            owner_phone=data.get("owner_phone") or "",
            owner_email=data.get("owner_email"),
            owner_address=data.get("owner_address"),
            notes=data.get("notes"),
        )

    @classmethod
    def from_model(cls, owner: Any) -> "OwnershipRecord":
        """Build a record from a GemstoneOwner ORM instance."""
        return cls(
            id=owner.id,
            ownership_start_date=parse_calendar_date(owner.ownership_start_date),
            ownership_end_date=parse_calendar_date(owner.ownership_end_date),
            is_current_owner=bool(owner.is_current_owner),
            owner_name=owner.owner_name or "",
            owner_phone=owner.owner_phone or "",
            owner_email=owner.owner_email,
            owner_address=owner.owner_address,
            notes=owner.notes,
        )


@dataclass(frozen=True)
class DateConstraints:
    """Allowed date window for a start/end pair. None means unbounded."""

    min_start_date: date | None = None
    max_start_date: date | None = None
    min_end_date: date | None = None
    max_end_date: date | None = None


class ValidationContext(str, Enum):
    """Which form a date pair is being validated for."""

    ADD_TRANSFER = "add_transfer"
    ADD_HISTORY = "add_history"
    EDIT = "edit"

    @classmethod
    def for_add(cls, is_transfer: bool) -> "ValidationContext":
        return cls.ADD_TRANSFER if is_transfer else cls.ADD_HISTORY


@dataclass(frozen=True)
class ProposedUpdate:
    """Neighbour boundary change produced by a cascade."""

    record: OwnershipRecord
    ownership_start_date: date
    ownership_end_date: date | None
    reason: str = ""

    def payload(self) -> dict[str, Any]:
        """Full update body for the neighbour, as the owners PUT endpoint expects it."""
        return {
            "owner_name": self.record.owner_name,
            "owner_phone": self.record.owner_phone,
            "owner_email": self.record.owner_email or "",
            "owner_address": self.record.owner_address or "",
            "ownership_start_date": to_iso_date(self.ownership_start_date),
            "ownership_end_date": (
                None if self.record.is_current_owner else to_iso_date(self.ownership_end_date)
            ),
            "notes": self.record.notes or "",
        }


@dataclass
class CascadeOutcome:
    """Result of submitting cascade proposals one by one."""

    applied: list[ProposedUpdate] = field(default_factory=list)
    failed: list[tuple[ProposedUpdate, str]] = field(default_factory=list)
