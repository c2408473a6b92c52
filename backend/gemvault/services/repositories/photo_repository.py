"""Gemstone gallery photo data access layer."""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from gemvault.models import GemstonePhoto

from .exceptions import NotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence


class PhotoRepository:
    """Gallery photo data access, using the find_*/get_* naming of the other repositories."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_gemstone(self, gemstone_id: int) -> "Sequence[GemstonePhoto]":
        """Photos of a gemstone, newest first."""
        return (
            self._db.query(GemstonePhoto)
            .filter(GemstonePhoto.gemstone_id == gemstone_id)
            .order_by(GemstonePhoto.created_at.desc(), GemstonePhoto.id.desc())
            .all()
        )

    def find_for_gemstone(self, gemstone_id: int, photo_id: int) -> GemstonePhoto | None:
        return (
            self._db.query(GemstonePhoto)
            .filter(GemstonePhoto.gemstone_id == gemstone_id, GemstonePhoto.id == photo_id)
            .first()
        )

    def get_for_gemstone(self, gemstone_id: int, photo_id: int) -> GemstonePhoto:
        photo = self.find_for_gemstone(gemstone_id, photo_id)
        if photo is None:
            raise NotFoundError("Photo", photo_id)
        return photo

    def add(self, photo: GemstonePhoto) -> GemstonePhoto:
        self._db.add(photo)
        self._db.flush()
        return photo

    def delete(self, photo: GemstonePhoto) -> None:
        self._db.delete(photo)
        self._db.flush()
