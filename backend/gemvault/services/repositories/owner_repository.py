"""Gemstone owner data access layer."""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from gemvault.models import GemstoneOwner

from .exceptions import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence


class OwnerRepository:
    """Centralized ownership record data access.

    Naming conventions:
    - find_* : Query that may return None or empty list
    - get_* : Query that raises NotFoundError if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_gemstone(self, gemstone_id: int) -> "Sequence[GemstoneOwner]":
        """Ownership records of a gemstone, oldest first."""
        return (
            self._db.query(GemstoneOwner)
            .filter(GemstoneOwner.gemstone_id == gemstone_id)
            .order_by(GemstoneOwner.ownership_start_date.asc(), GemstoneOwner.id.asc())
            .all()
        )

    def find_for_gemstone(self, gemstone_id: int, owner_id: int) -> GemstoneOwner | None:
        return (
            self._db.query(GemstoneOwner)
            .filter(GemstoneOwner.gemstone_id == gemstone_id, GemstoneOwner.id == owner_id)
            .first()
        )

    def get_for_gemstone(self, gemstone_id: int, owner_id: int) -> GemstoneOwner:
        """Get an owner of a specific gemstone or raise NotFoundError."""
        owner = self.find_for_gemstone(gemstone_id, owner_id)
        if owner is None:
            raise NotFoundError("Owner", owner_id)
        return owner

    def find_current(self, gemstone_id: int) -> GemstoneOwner | None:
        """The open ownership record of a gemstone, if any."""
        return (
            self._db.query(GemstoneOwner)
            .filter(
                GemstoneOwner.gemstone_id == gemstone_id,
                GemstoneOwner.is_current_owner.is_(True),
            )
            .first()
        )

    def find_contacts(self) -> "Sequence[GemstoneOwner]":
        """One record per distinct owner name/phone, most recent first.

        Used as templates when the same person owns another gemstone.
        """
        owners = (
            self._db.query(GemstoneOwner)
            .order_by(GemstoneOwner.created_at.desc(), GemstoneOwner.id.desc())
            .all()
        )
        seen: set[tuple[str, str]] = set()
        contacts = []
        for owner in owners:
            key = (owner.owner_name.strip().lower(), owner.owner_phone.strip())
            if key in seen:
                continue
            seen.add(key)
            contacts.append(owner)
        return contacts

    def count(self) -> int:
        return self._db.query(GemstoneOwner).count()

    def find_recent(self, limit: int = 5) -> "Sequence[GemstoneOwner]":
        """Most recently created ownership records."""
        return (
            self._db.query(GemstoneOwner)
            .order_by(GemstoneOwner.created_at.desc(), GemstoneOwner.id.desc())
            .limit(limit)
            .all()
        )

    def add(self, owner: GemstoneOwner) -> GemstoneOwner:
        self._db.add(owner)
        self._db.flush()
        return owner

    def delete(self, owner: GemstoneOwner) -> None:
        self._db.delete(owner)
        self._db.flush()
