"""SQLAlchemy ORM models."""

from gemvault.models.admin import Admin
from gemvault.models.gemstone import Gemstone
from gemvault.models.gemstone_owner import GemstoneOwner
from gemvault.models.gemstone_photo import GemstonePhoto

__all__ = [
    "Admin",
    "Gemstone",
    "GemstoneOwner",
    "GemstonePhoto",
]
