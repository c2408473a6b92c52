"""Gemstone owners API router."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from gemvault.database import get_db
from gemvault.dependencies.auth import get_current_admin
from gemvault.models.admin import Admin
from gemvault.schemas.owner import Owner, OwnerContact, OwnerCreate, OwnerUpdate, OwnerUpdateResult
from gemvault.services.ownership import OwnershipService
from gemvault.services.repositories import NotFoundError, OwnerRepository

router = APIRouter(prefix="/api", tags=["owners"])


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{e.entity_type} not found",
    )


@router.get("/gemstones/{gemstone_id}/owners", response_model=list[Owner])
def list_owners(
    gemstone_id: int,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Ownership records of a gemstone, oldest first."""
    try:
        return OwnershipService(db).list_owners(gemstone_id)
    except NotFoundError as e:
        raise _not_found(e) from e


@router.post(
    "/gemstones/{gemstone_id}/owners",
    response_model=Owner,
    status_code=status.HTTP_201_CREATED,
)
def add_owner(
    gemstone_id: int,
    data: OwnerCreate,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """
    Add an owner.

    With `is_transfer` the new owner becomes the current owner and the
    previous current owner is closed on the transfer date. Otherwise the
    record is added to the history.
    """
    try:
        return OwnershipService(db).add_owner(gemstone_id, data)
    except NotFoundError as e:
        raise _not_found(e) from e


@router.put("/gemstones/{gemstone_id}/owners/{owner_id}", response_model=OwnerUpdateResult)
def update_owner(
    gemstone_id: int,
    owner_id: int,
    data: OwnerUpdate,
    cascade: bool = Query(False, description="Also move neighbouring owners' boundary dates"),
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Update an owner's details and ownership dates."""
    try:
        owner, cascaded_ids = OwnershipService(db).update_owner(
            gemstone_id, owner_id, data, cascade=cascade
        )
    except NotFoundError as e:
        raise _not_found(e) from e

    return OwnerUpdateResult(
        **Owner.model_validate(owner).model_dump(),
        cascaded_owner_ids=cascaded_ids,
    )


@router.delete(
    "/gemstones/{gemstone_id}/owners/{owner_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_owner(
    gemstone_id: int,
    owner_id: int,
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Delete an ownership record."""
    try:
        OwnershipService(db).delete_owner(gemstone_id, owner_id)
    except NotFoundError as e:
        raise _not_found(e) from e
    return None


@router.get("/owners/all", response_model=list[OwnerContact])
def list_owner_contacts(
    db: Session = Depends(get_db),
    admin: Admin = Depends(get_current_admin),
):
    """Distinct owners across all gemstones, for reuse as form templates."""
    return OwnerRepository(db).find_contacts()
