"""Ownership interval management - keeps a gemstone's owners a contiguous chain.

Records sorted by start date form a chain where each record ends on the day
its successor starts, and only the last record may be open-ended (the
current owner). The functions here are pure: they take the sorted records
and the record being changed, and return constraints, field errors, or the
neighbour updates needed to keep the chain contiguous after an edit.
"""

import logging
from collections.abc import Callable, Sequence
from datetime import date
from typing import Any

from gemvault.services.ownership.interval_types import (
    CascadeOutcome,
    DateConstraints,
    OwnershipRecord,
    ProposedUpdate,
    ValidationContext,
)
from gemvault.services.shared.date_utils import format_date_for_display, today_in_zone

logger = logging.getLogger(__name__)

START_FIELD = "ownership_start_date"
END_FIELD = "ownership_end_date"

_BOUND_LABELS = {
    (ValidationContext.ADD_TRANSFER, "min_start_date"): "current owner's start date",
    (ValidationContext.ADD_HISTORY, "max_start_date"): "first owner's start date",
    (ValidationContext.ADD_HISTORY, "max_end_date"): "first owner's start date",
}


def sort_records(records: Sequence[OwnershipRecord]) -> list[OwnershipRecord]:
    """Chronological order by start date; ties keep the order the API returned."""
    return sorted(records, key=lambda r: r.ownership_start_date)


def find_current_owner(records: Sequence[OwnershipRecord]) -> OwnershipRecord | None:
    return next((r for r in records if r.is_current_owner), None)


def find_neighbours(
    sorted_records: Sequence[OwnershipRecord], record_id: int | str
) -> tuple[int, OwnershipRecord | None, OwnershipRecord | None]:
    """Locate a record and its chronological neighbours.

    Returns:
        (index, previous, next); index is -1 when the record is not in the list
    """
    index = next(
        (i for i, r in enumerate(sorted_records) if str(r.id) == str(record_id)),
        -1,
    )
    if index == -1:
        return -1, None, None

    previous = sorted_records[index - 1] if index > 0 else None
    following = sorted_records[index + 1] if index < len(sorted_records) - 1 else None
    return index, previous, following


def compute_add_constraints(
    existing_records: Sequence[OwnershipRecord], is_transfer: bool
) -> DateConstraints:
    """Date window for a new record.

    A transfer cannot start before the current owner's tenure began. A
    historical record is inserted before the earliest known owner, so both
    its dates are capped at that owner's start date.

    Args:
        existing_records: Records sorted by start date
        is_transfer: Whether the new record becomes the current owner
    """
    current = find_current_owner(existing_records)

    if is_transfer and current is not None:
        return DateConstraints(min_start_date=current.ownership_start_date)

    if not is_transfer and existing_records:
        earliest_start = existing_records[0].ownership_start_date
        return DateConstraints(max_start_date=earliest_start, max_end_date=earliest_start)

    return DateConstraints()


def compute_edit_constraints(
    existing_records: Sequence[OwnershipRecord],
    target: OwnershipRecord,
    today: date | None = None,
) -> DateConstraints:
    """Date window for editing an existing record.

    Args:
        existing_records: Records sorted by start date
        target: The record being edited (matched by id)
        today: Reference date for the "no future end date" rule
    """
    index, previous, following = find_neighbours(existing_records, target.id)
    if index == -1:
        return DateConstraints()

    min_start = previous.ownership_start_date if previous else None
    max_start = None
    max_end = None

    if following is not None:
        max_end = following.ownership_start_date
        if target.ownership_end_date:
            max_start = target.ownership_end_date

    if target.is_current_owner:
        if previous is not None:
            min_start = previous.ownership_end_date or previous.ownership_start_date
    else:
        today = today or today_in_zone()
        max_end = min(max_end, today) if max_end else today

    return DateConstraints(
        min_start_date=min_start,
        max_start_date=max_start,
        min_end_date=None,
        max_end_date=max_end,
    )


def _bound_message(prefix: str, relation: str, bound: date, context: ValidationContext, name: str) -> str:
    message = f"{prefix} cannot be {relation} {format_date_for_display(bound)}"
    label = _BOUND_LABELS.get((context, name))
    return f"{message} ({label})" if label else message


def validate_dates(
    candidate_start: date | None,
    candidate_end: date | None,
    constraints: DateConstraints,
    context: ValidationContext = ValidationContext.EDIT,
) -> dict[str, str]:
    """Check a start/end pair against a date window.

    At most one error is reported per field and the first violation wins,
    so the same inputs always give the same errors.

    Returns:
        Field name -> message; empty when the pair is acceptable
    """
    errors: dict[str, str] = {}

    if candidate_end and not candidate_start:
        errors[START_FIELD] = "Start date must be selected before the end date"

    if candidate_start and START_FIELD not in errors:
        if constraints.min_start_date and candidate_start < constraints.min_start_date:
            errors[START_FIELD] = _bound_message(
                "Start date", "earlier than", constraints.min_start_date, context, "min_start_date"
            )
        elif constraints.max_start_date and candidate_start > constraints.max_start_date:
            errors[START_FIELD] = _bound_message(
                "Start date", "later than", constraints.max_start_date, context, "max_start_date"
            )

    if candidate_end:
        if candidate_start and candidate_end <= candidate_start:
            errors[END_FIELD] = "End date must be after the start date"
        elif constraints.min_end_date and candidate_end < constraints.min_end_date:
            errors[END_FIELD] = _bound_message(
                "End date", "earlier than", constraints.min_end_date, context, "min_end_date"
            )
        elif constraints.max_end_date and candidate_end > constraints.max_end_date:
            errors[END_FIELD] = _bound_message(
                "End date", "later than", constraints.max_end_date, context, "max_end_date"
            )

    return errors


def required_date_errors(
    context: ValidationContext,
    *,
    has_current_owner: bool,
    editing_current_owner: bool,
    candidate_start: date | None,
    candidate_end: date | None,
) -> dict[str, str]:
    """Form rules for which dates must be filled in."""
    errors: dict[str, str] = {}

    if not candidate_start:
        errors[START_FIELD] = "Ownership start date is required"

    if candidate_end is None:
        if context is ValidationContext.ADD_HISTORY and has_current_owner:
            errors[END_FIELD] = "End date is required when adding a previous owner"
        elif context is ValidationContext.EDIT and not editing_current_owner:
            errors[END_FIELD] = "End date is required for a former owner"

    return errors


def cascade_adjust(
    edited: OwnershipRecord,
    new_start: date | None,
    new_end: date | None,
    sorted_records: Sequence[OwnershipRecord],
    today: date | None = None,
) -> list[ProposedUpdate]:
    """Neighbour updates that keep the chain contiguous after an edit.

    The previous owner's end moves to the new start; the next owner's start
    moves to the new end, or to today when the edited record is the current
    owner. Neighbours whose boundary already matches are left alone.

    Args:
        edited: The record as it was before the edit
        new_start: Start date that was saved
        new_end: End date that was saved
        sorted_records: Records sorted by start date, as loaded before the edit
        today: Reference date for an open-ended edited record

    Returns:
        Proposals in submission order: previous first, then next
    """
    index, previous, following = find_neighbours(sorted_records, edited.id)
    if index == -1:
        return []

    proposals: list[ProposedUpdate] = []

    if previous is not None and new_start:
        if previous.ownership_end_date != new_start:
            proposals.append(
                ProposedUpdate(
                    record=previous,
                    ownership_start_date=previous.ownership_start_date,
                    ownership_end_date=new_start,
                    reason="previous owner ends when the edited owner starts",
                )
            )

    if following is not None and (new_end or edited.is_current_owner):
        reference = (today or today_in_zone()) if edited.is_current_owner else new_end
        if following.ownership_start_date != reference:
            proposals.append(
                ProposedUpdate(
                    record=following,
                    ownership_start_date=reference,
                    ownership_end_date=(
                        None if following.is_current_owner else following.ownership_end_date
                    ),
                    reason="next owner starts when the edited owner ends",
                )
            )

    return proposals


def apply_cascade(
    proposals: Sequence[ProposedUpdate],
    submit: Callable[[ProposedUpdate], Any],
) -> CascadeOutcome:
    """Submit proposals one at a time; a failure does not stop the rest.

    The primary edit has already been saved when this runs, so failed
    neighbour updates are logged and reported rather than raised.
    """
    outcome = CascadeOutcome()
    for proposal in proposals:
        try:
            submit(proposal)
        except Exception as e:
            logger.warning(f"Cascade update for owner {proposal.record.id} failed: {e}")
            outcome.failed.append((proposal, str(e)))
            continue
        outcome.applied.append(proposal)
    return outcome
