"""Pydantic schemas for request/response validation."""

from gemvault.schemas.admin import DashboardStats, DashboardTotals, RecentGemstone, RecentOwner
from gemvault.schemas.auth import (
    AdminInfo,
    AdminLogin,
    ChangePasswordRequest,
    TokenResponse,
    TokenVerification,
)
from gemvault.schemas.common import (
    ErrorDetail,
    ErrorResponse,
    MessageResponse,
    PaginatedResponse,
)
from gemvault.schemas.gemstone import (
    Gemstone,
    GemstoneCreate,
    GemstoneUpdate,
    GemstoneVerification,
)
from gemvault.schemas.owner import (
    Owner,
    OwnerContact,
    OwnerCreate,
    OwnerUpdate,
    OwnerUpdateResult,
    PublicOwner,
)
from gemvault.schemas.photo import Photo, PhotoCreate, PhotoUpdate, PublicPhoto

__all__ = [
    "AdminInfo",
    "AdminLogin",
    "ChangePasswordRequest",
    "DashboardStats",
    "DashboardTotals",
    "ErrorDetail",
    "ErrorResponse",
    "Gemstone",
    "GemstoneCreate",
    "GemstoneUpdate",
    "GemstoneVerification",
    "MessageResponse",
    "Owner",
    "OwnerContact",
    "OwnerCreate",
    "OwnerUpdate",
    "OwnerUpdateResult",
    "PaginatedResponse",
    "Photo",
    "PhotoCreate",
    "PhotoUpdate",
    "PublicOwner",
    "PublicPhoto",
    "RecentGemstone",
    "RecentOwner",
    "TokenResponse",
    "TokenVerification",
]
