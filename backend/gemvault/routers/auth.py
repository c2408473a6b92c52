"""Admin authentication and dashboard router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from gemvault.database import get_db
from gemvault.dependencies.auth import get_current_admin
from gemvault.models.admin import Admin
from gemvault.rate_limiter import limiter
from gemvault.schemas.admin import DashboardStats, DashboardTotals, RecentGemstone, RecentOwner
from gemvault.schemas.auth import (
    AdminInfo,
    AdminLogin,
    ChangePasswordRequest,
    TokenResponse,
    TokenVerification,
)
from gemvault.schemas.common import MessageResponse
from gemvault.services.auth_service import AuthService
from gemvault.services.repositories import GemstoneRepository, OwnerRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

RECENT_ACTIVITY_LIMIT = 5


@router.post("/login", response_model=TokenResponse)
@limiter.limit("5/minute")
def login(request: Request, data: AdminLogin, db: Session = Depends(get_db)) -> TokenResponse:
    """Login and get an access token."""
    admin = db.query(Admin).filter(Admin.username == data.username).first()
    if not admin:
        # Dummy verification keeps response time independent of the username
        AuthService.verify_password(data.password, AuthService.get_dummy_hash())
        logger.warning(f"Login failed for unknown admin: {data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    if not AuthService.verify_password(data.password, admin.password_hash):
        logger.warning(f"Login failed for admin: {data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    lifetime = AuthService.token_lifetime()
    access_token = AuthService.create_access_token(admin.id, admin.username, lifetime)

    logger.info(f"Admin logged in: {admin.username}")
    return TokenResponse(
        access_token=access_token,
        expires_in=int(lifetime.total_seconds()),
        admin=AdminInfo.model_validate(admin),
    )


@router.get("/verify", response_model=TokenVerification)
def verify_token(admin: Admin = Depends(get_current_admin)) -> TokenVerification:
    """Check that the bearer token is still valid."""
    return TokenVerification(admin=AdminInfo.model_validate(admin))


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    data: ChangePasswordRequest,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
) -> MessageResponse:
    """Change the current admin's password."""
    if not AuthService.verify_password(data.current_password, admin.password_hash):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )

    admin.password_hash = AuthService.hash_password(data.new_password)
    db.commit()

    logger.info(f"Password changed for admin: {admin.username}")
    return MessageResponse(message="Password changed successfully")


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
) -> DashboardStats:
    """Totals and recent activity for the admin dashboard."""
    gemstones = GemstoneRepository(db)
    owners = OwnerRepository(db)

    total = gemstones.count()
    with_owner = gemstones.count_with_current_owner()

    return DashboardStats(
        totals=DashboardTotals(
            total_gemstones=total,
            gemstones_with_current_owner=with_owner,
            gemstones_without_owner=total - with_owner,
            total_owner_records=owners.count(),
        ),
        recent_gemstones=[
            RecentGemstone(
                id=g.id,
                unique_id_number=g.unique_id_number,
                name=g.name,
                created_at=g.created_at,
            )
            for g in gemstones.find_recent(RECENT_ACTIVITY_LIMIT)
        ],
        recent_owners=[
            RecentOwner(
                id=o.id,
                gemstone_id=o.gemstone_id,
                gemstone_name=o.gemstone.name,
                owner_name=o.owner_name,
                ownership_start_date=o.ownership_start_date,
                is_current_owner=o.is_current_owner,
            )
            for o in owners.find_recent(RECENT_ACTIVITY_LIMIT)
        ],
    )
