"""Repository layer - data access abstraction.

Repositories handle all database queries, providing a clean interface
for services. Services should use repositories for data access rather
than directly querying SQLAlchemy models.

Dependency direction: Services -> Repositories -> Models
"""

from .exceptions import NotFoundError, RepositoryError
from .gemstone_repository import GemstoneRepository
from .owner_repository import OwnerRepository
from .photo_repository import PhotoRepository

__all__ = [
    "GemstoneRepository",
    "NotFoundError",
    "OwnerRepository",
    "PhotoRepository",
    "RepositoryError",
]
