"""Gemstones API router - admin CRUD, photo galleries and public certificate verification."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from gemvault.config import settings
from gemvault.database import get_db
from gemvault.dependencies.auth import get_current_admin
from gemvault.models.admin import Admin
from gemvault.models.gemstone import Gemstone
from gemvault.models.gemstone_photo import GemstonePhoto
from gemvault.schemas.common import PaginatedResponse
from gemvault.schemas.gemstone import Gemstone as GemstoneSchema
from gemvault.schemas.gemstone import (
    GemstoneCreate,
    GemstoneUpdate,
    GemstoneVerification,
)
from gemvault.schemas.owner import PublicOwner
from gemvault.schemas.photo import Photo, PhotoCreate, PhotoUpdate, PublicPhoto
from gemvault.services.identifier_service import IdentifierService
from gemvault.services.repositories import (
    GemstoneRepository,
    NotFoundError,
    OwnerRepository,
    PhotoRepository,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gemstones", tags=["gemstones"])


def _absolute_photo_url(photo_url: str | None) -> str | None:
    """Prefix relative upload paths with the server's public URL."""
    if not photo_url or photo_url.startswith(("http://", "https://", "data:")):
        return photo_url
    return f"{settings.server_base_url.rstrip('/')}/{photo_url.lstrip('/')}"


def _to_schema(gemstone: Gemstone) -> GemstoneSchema:
    result = GemstoneSchema.model_validate(gemstone)
    return result.model_copy(update={"photo_url": _absolute_photo_url(result.photo_url)})


def _photo_to_schema(photo: GemstonePhoto, schema: type[PublicPhoto] = Photo) -> PublicPhoto:
    result = schema.model_validate(photo)
    return result.model_copy(update={"photo_url": _absolute_photo_url(result.photo_url)})


def _get_gemstone_or_404(db: Session, gemstone_id: int) -> Gemstone:
    try:
        return GemstoneRepository(db).get_by_id(gemstone_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Gemstone not found",
        ) from None


def _get_by_unique_id_or_404(db: Session, unique_id: str) -> Gemstone:
    try:
        return GemstoneRepository(db).get_by_unique_id(unique_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Gemstone not found",
        ) from None


@router.post("", response_model=GemstoneSchema, status_code=status.HTTP_201_CREATED)
def create_gemstone(
    gemstone: GemstoneCreate,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Register a gemstone and issue its certificate number and QR code."""
    identifiers = IdentifierService.generate()
    db_gemstone = Gemstone(
        unique_id_number=identifiers.unique_id_number,
        qr_code_data_url=identifiers.qr_code_data_url,
        **gemstone.model_dump(),
    )
    GemstoneRepository(db).add(db_gemstone)
    db.commit()
    db.refresh(db_gemstone)

    return _to_schema(db_gemstone)


@router.get("", response_model=PaginatedResponse[GemstoneSchema])
def list_gemstones(
    search: str = Query("", description="Match against name, ID number, color, origin"),
    sort_by: str = Query("created_at", description="Field to sort by"),
    sort_order: str = Query("desc", description="asc or desc"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Paginated list of gemstones."""
    items, total = GemstoneRepository(db).search(
        search.strip(), sort_by=sort_by, sort_order=sort_order, skip=skip, limit=limit
    )
    return PaginatedResponse[GemstoneSchema](
        items=[_to_schema(g) for g in items],
        total=total,
        skip=skip,
        limit=limit,
        has_more=skip + len(items) < total,
    )


@router.get("/{gemstone_id}/detail", response_model=GemstoneSchema)
def get_gemstone_detail(
    gemstone_id: int,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Gemstone details by internal id."""
    return _to_schema(_get_gemstone_or_404(db, gemstone_id))


@router.put("/{gemstone_id}", response_model=GemstoneSchema)
def update_gemstone(
    gemstone_id: int,
    gemstone_update: GemstoneUpdate,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Update the given fields of a gemstone. Identifiers never change."""
    db_gemstone = _get_gemstone_or_404(db, gemstone_id)

    for field, value in gemstone_update.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(db_gemstone, field, value)

    db.commit()
    db.refresh(db_gemstone)

    logger.info(f"Updated gemstone {db_gemstone.unique_id_number}")
    return _to_schema(db_gemstone)


@router.delete("/{gemstone_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_gemstone(
    gemstone_id: int,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Delete a gemstone together with its ownership records."""
    db_gemstone = _get_gemstone_or_404(db, gemstone_id)
    unique_id = db_gemstone.unique_id_number

    GemstoneRepository(db).delete(db_gemstone)
    db.commit()

    logger.info(f"Deleted gemstone {unique_id}")
    return None


@router.get("/{unique_id}", response_model=GemstoneVerification)
def verify_gemstone(unique_id: str, db: Session = Depends(get_db)):
    """Public certificate lookup by unique ID number."""
    gemstone = _get_by_unique_id_or_404(db, unique_id)
    logger.info(f"Certificate verified: {unique_id}")
    return GemstoneVerification(
        **_to_schema(gemstone).model_dump(),
        verified=True,
        verification_timestamp=datetime.now(UTC),
    )


@router.get("/{unique_id}/owners/public", response_model=list[PublicOwner])
def public_ownership_history(unique_id: str, db: Session = Depends(get_db)):
    """Ownership history without contact details."""
    gemstone = _get_by_unique_id_or_404(db, unique_id)
    return OwnerRepository(db).find_by_gemstone(gemstone.id)


@router.get("/{unique_id}/photos/public", response_model=list[PublicPhoto])
def public_photo_gallery(unique_id: str, db: Session = Depends(get_db)):
    """Gallery shown on the public certificate page."""
    gemstone = _get_by_unique_id_or_404(db, unique_id)
    photos = PhotoRepository(db).find_by_gemstone(gemstone.id)
    return [_photo_to_schema(p, PublicPhoto) for p in photos]


# ============================================================================
# Photo gallery (admin)
# ============================================================================


def _get_photo_or_404(db: Session, gemstone_id: int, photo_id: int) -> GemstonePhoto:
    try:
        return PhotoRepository(db).get_for_gemstone(gemstone_id, photo_id)
    except NotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Photo not found",
        ) from None


@router.get("/{gemstone_id}/photos", response_model=list[Photo])
def list_photos(
    gemstone_id: int,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    _get_gemstone_or_404(db, gemstone_id)
    return [_photo_to_schema(p) for p in PhotoRepository(db).find_by_gemstone(gemstone_id)]


@router.post("/{gemstone_id}/photos", response_model=Photo, status_code=status.HTTP_201_CREATED)
def add_photo(
    gemstone_id: int,
    photo: PhotoCreate,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Add an already hosted image to the gallery."""
    _get_gemstone_or_404(db, gemstone_id)
    db_photo = GemstonePhoto(
        gemstone_id=gemstone_id,
        uploaded_by=admin.username,
        **photo.model_dump(),
    )
    PhotoRepository(db).add(db_photo)
    db.commit()
    db.refresh(db_photo)

    logger.info(f"Added photo {db_photo.id} to gemstone {gemstone_id}")
    return _photo_to_schema(db_photo)


@router.put("/{gemstone_id}/photos/{photo_id}", response_model=Photo)
def update_photo_caption(
    gemstone_id: int,
    photo_id: int,
    photo_update: PhotoUpdate,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    db_photo = _get_photo_or_404(db, gemstone_id, photo_id)
    db_photo.caption = photo_update.caption
    db.commit()
    db.refresh(db_photo)
    return _photo_to_schema(db_photo)


@router.delete("/{gemstone_id}/photos/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_photo(
    gemstone_id: int,
    photo_id: int,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    db_photo = _get_photo_or_404(db, gemstone_id, photo_id)
    PhotoRepository(db).delete(db_photo)
    db.commit()

    logger.info(f"Deleted photo {photo_id} of gemstone {gemstone_id}")
    return None
