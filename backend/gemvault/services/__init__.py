"""Services layer - business logic and external integrations.

This module is organized into domain-based subpackages:
- ownership/: Ownership interval rules, owner persistence, admin edit session
- repositories/: Data access layer
- shared/: Shared utilities (calendar dates, HTTP client)

Common imports for convenience:
    from gemvault.services import GemstoneRepository, OwnerRepository
"""

# Re-export commonly used components for convenience
from gemvault.services.repositories import (
    GemstoneRepository,
    NotFoundError,
    OwnerRepository,
    RepositoryError,
)

__all__ = [
    # Repositories
    "GemstoneRepository",
    "NotFoundError",
    "OwnerRepository",
    "RepositoryError",
]
