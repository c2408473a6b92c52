"""Ownership service - persists owner changes while keeping the chain consistent."""

import logging
from datetime import date

from sqlalchemy.orm import Session

from gemvault.models import GemstoneOwner
from gemvault.schemas.owner import OwnerCreate, OwnerUpdate
from gemvault.services.ownership.exceptions import OwnershipValidationError
from gemvault.services.ownership.interval_service import (
    END_FIELD,
    START_FIELD,
    cascade_adjust,
    compute_add_constraints,
    compute_edit_constraints,
    find_current_owner,
    required_date_errors,
    sort_records,
    validate_dates,
)
from gemvault.services.ownership.interval_types import OwnershipRecord, ValidationContext
from gemvault.services.repositories import GemstoneRepository, OwnerRepository
from gemvault.services.shared.date_utils import format_date_for_display, today_in_zone

logger = logging.getLogger(__name__)

_CONTACT_FIELDS = ("owner_name", "owner_phone", "owner_email", "owner_address", "notes")


class OwnershipService:
    """Adds, edits and removes ownership records of a gemstone.

    Every add and edit is checked with the same interval rules the admin
    panel applies before submitting, so a client that skips them cannot
    break the chain.
    """

    def __init__(self, db: Session, today: date | None = None) -> None:
        self._db = db
        self._gemstones = GemstoneRepository(db)
        self._owners = OwnerRepository(db)
        self._today = today

    @property
    def today(self) -> date:
        return self._today or today_in_zone()

    def list_owners(self, gemstone_id: int) -> list[GemstoneOwner]:
        """Ownership records of a gemstone, oldest first."""
        self._gemstones.get_by_id(gemstone_id)
        return list(self._owners.find_by_gemstone(gemstone_id))

    def _load_chain(self, gemstone_id: int) -> tuple[list[GemstoneOwner], list[OwnershipRecord]]:
        owners = list(self._owners.find_by_gemstone(gemstone_id))
        records = sort_records([OwnershipRecord.from_model(o) for o in owners])
        return owners, records

    def add_owner(self, gemstone_id: int, data: OwnerCreate) -> GemstoneOwner:
        """Add an owner as a transfer (new current owner) or as history.

        Raises:
            NotFoundError: If the gemstone does not exist
            OwnershipValidationError: If the dates do not fit the chain
        """
        self._gemstones.get_by_id(gemstone_id)
        _, records = self._load_chain(gemstone_id)
        current = find_current_owner(records)

        context = ValidationContext.for_add(data.is_transfer)
        start = data.ownership_start_date
        end = None if data.is_transfer else data.ownership_end_date

        errors = required_date_errors(
            context,
            has_current_owner=current is not None,
            editing_current_owner=False,
            candidate_start=start,
            candidate_end=end,
        )
        errors.update(
            validate_dates(start, end, compute_add_constraints(records, data.is_transfer), context)
        )
        if not errors:
            errors = self._chain_errors_for_add(records, current, data.is_transfer, start, end)
        if errors:
            raise OwnershipValidationError(errors)

        previous_owner = self._owners.find_current(gemstone_id) if data.is_transfer else None
        if previous_owner is not None:
            previous_owner.is_current_owner = False
            previous_owner.ownership_end_date = start
            logger.info(
                f"Closed ownership {previous_owner.id} of gemstone {gemstone_id} on {start}"
            )

        is_current = data.is_transfer or (not records and end is None)
        owner = GemstoneOwner(
            gemstone_id=gemstone_id,
            ownership_start_date=start,
            ownership_end_date=None if is_current else end,
            is_current_owner=is_current,
            **{name: getattr(data, name) for name in _CONTACT_FIELDS},
        )
        self._owners.add(owner)
        self._db.commit()
        self._db.refresh(owner)

        logger.info(
            f"Added {'current' if is_current else 'historical'} owner {owner.id} "
            f"to gemstone {gemstone_id}"
        )
        return owner

    def _chain_errors_for_add(
        self,
        records: list[OwnershipRecord],
        current: OwnershipRecord | None,
        is_transfer: bool,
        start: date,
        end: date | None,
    ) -> dict[str, str]:
        """Checks that keep a single open interval at the end of the chain."""
        if is_transfer and current is not None and start == current.ownership_start_date:
            return {START_FIELD: "Transfer date must be after the current owner's start date"}

        if is_transfer and current is None and records:
            latest = records[-1]
            boundary = latest.ownership_end_date or latest.ownership_start_date
            if start < boundary:
                return {
                    START_FIELD: (
                        f"Start date cannot be earlier than {format_date_for_display(boundary)} "
                        "(last owner's end date)"
                    )
                }

        if not is_transfer and records and end is None:
            return {END_FIELD: "End date is required when adding a previous owner"}

        return {}

    def update_owner(
        self,
        gemstone_id: int,
        owner_id: int,
        data: OwnerUpdate,
        cascade: bool = False,
    ) -> tuple[GemstoneOwner, list[int]]:
        """Update an owner's details and dates.

        Args:
            gemstone_id: Gemstone the owner belongs to
            owner_id: Owner to update
            data: New field values
            cascade: Also move the neighbouring boundaries in the same
                transaction instead of leaving it to the caller

        Returns:
            (updated owner, ids of neighbours changed by the cascade)

        Raises:
            NotFoundError: If the owner does not belong to the gemstone
            OwnershipValidationError: If the dates do not fit the chain
        """
        owner = self._owners.get_for_gemstone(gemstone_id, owner_id)
        owners, records = self._load_chain(gemstone_id)
        target = OwnershipRecord.from_model(owner)

        start = data.ownership_start_date
        end = None if owner.is_current_owner else data.ownership_end_date

        errors = required_date_errors(
            ValidationContext.EDIT,
            has_current_owner=find_current_owner(records) is not None,
            editing_current_owner=target.is_current_owner,
            candidate_start=start,
            candidate_end=end,
        )
        errors.update(
            validate_dates(
                start,
                end,
                compute_edit_constraints(records, target, self.today),
                ValidationContext.EDIT,
            )
        )
        if errors:
            raise OwnershipValidationError(errors)

        for name in _CONTACT_FIELDS:
            setattr(owner, name, getattr(data, name))
        owner.ownership_start_date = start
        owner.ownership_end_date = end

        cascaded_ids: list[int] = []
        if cascade:
            by_id = {o.id: o for o in owners}
            for proposal in cascade_adjust(target, start, end, records, self.today):
                neighbour = by_id[proposal.record.id]
                neighbour.ownership_start_date = proposal.ownership_start_date
                neighbour.ownership_end_date = proposal.ownership_end_date
                cascaded_ids.append(neighbour.id)

        self._db.commit()
        self._db.refresh(owner)

        logger.info(f"Updated owner {owner_id} of gemstone {gemstone_id}")
        if cascaded_ids:
            logger.info(f"Cascaded boundary change to owners {cascaded_ids}")
        return owner, cascaded_ids

    def delete_owner(self, gemstone_id: int, owner_id: int) -> None:
        """Delete an ownership record. Neighbouring records are not adjusted."""
        owner = self._owners.get_for_gemstone(gemstone_id, owner_id)
        self._owners.delete(owner)
        self._db.commit()
        logger.info(f"Deleted owner {owner_id} of gemstone {gemstone_id}")
