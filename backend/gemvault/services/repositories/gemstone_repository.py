"""Gemstone data access layer."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy import or_
from sqlalchemy.orm import Session

from gemvault.models import Gemstone, GemstoneOwner

from .exceptions import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = ("id", "name", "weight_carat", "color", "origin", "created_at")
SEARCHABLE_FIELDS = ("name", "unique_id_number", "color", "origin", "description")


class GemstoneRepository:
    """Centralized gemstone data access.

    Naming conventions:
    - find_* : Query that may return None or empty list
    - get_* : Query that raises NotFoundError if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, gemstone_id: int) -> Gemstone | None:
        """Find gemstone by primary key."""
        return self._db.query(Gemstone).filter(Gemstone.id == gemstone_id).first()

    def get_by_id(self, gemstone_id: int) -> Gemstone:
        """Get gemstone by primary key or raise NotFoundError."""
        gemstone = self.find_by_id(gemstone_id)
        if gemstone is None:
            raise NotFoundError("Gemstone", gemstone_id)
        return gemstone

    def find_by_unique_id(self, unique_id_number: str) -> Gemstone | None:
        """Find gemstone by its certificate number."""
        return (
            self._db.query(Gemstone)
            .filter(Gemstone.unique_id_number == unique_id_number)
            .first()
        )

    def get_by_unique_id(self, unique_id_number: str) -> Gemstone:
        """Get gemstone by certificate number or raise NotFoundError."""
        gemstone = self.find_by_unique_id(unique_id_number)
        if gemstone is None:
            raise NotFoundError("Gemstone", unique_id_number)
        return gemstone

    def search(
        self,
        search: str = "",
        *,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        skip: int = 0,
        limit: int = 50,
    ) -> tuple["Sequence[Gemstone]", int]:
        """Filtered, sorted page of gemstones.

        Unknown sort fields fall back to created_at and unknown orders to desc.

        Returns:
            (gemstones on the page, total matching count)
        """
        query = self._db.query(Gemstone)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(*(getattr(Gemstone, name).ilike(pattern) for name in SEARCHABLE_FIELDS))
            )

        total = query.count()

        column = getattr(Gemstone, sort_by if sort_by in SORTABLE_FIELDS else "created_at")
        ordering = column.asc() if sort_order.lower() == "asc" else column.desc()
        items = query.order_by(ordering, Gemstone.id.desc()).offset(skip).limit(limit).all()
        return items, total

    def count(self) -> int:
        return self._db.query(Gemstone).count()

    def count_with_current_owner(self) -> int:
        """Number of gemstones that have an open (current) ownership record."""
        return (
            self._db.query(Gemstone.id)
            .join(GemstoneOwner, GemstoneOwner.gemstone_id == Gemstone.id)
            .filter(GemstoneOwner.is_current_owner.is_(True))
            .distinct()
            .count()
        )

    def find_recent(self, limit: int = 5) -> "Sequence[Gemstone]":
        """Most recently registered gemstones."""
        return (
            self._db.query(Gemstone)
            .order_by(Gemstone.created_at.desc(), Gemstone.id.desc())
            .limit(limit)
            .all()
        )

    def add(self, gemstone: Gemstone) -> Gemstone:
        """Persist a new gemstone and return it with its id assigned."""
        self._db.add(gemstone)
        self._db.flush()
        logger.info(f"Registered gemstone {gemstone.unique_id_number}")
        return gemstone

    def delete(self, gemstone: Gemstone) -> None:
        self._db.delete(gemstone)
        self._db.flush()
