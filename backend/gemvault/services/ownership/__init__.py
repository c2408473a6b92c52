"""Ownership history services.

Interval rules for a gemstone's ownership chain, the server-side service
that persists owners, and the admin edit session that drives the API.
"""

from .edit_session import OwnerEditSession, OwnerForm, SubmitResult
from .exceptions import OwnershipValidationError
from .interval_service import (
    END_FIELD,
    START_FIELD,
    apply_cascade,
    cascade_adjust,
    compute_add_constraints,
    compute_edit_constraints,
    find_current_owner,
    find_neighbours,
    required_date_errors,
    sort_records,
    validate_dates,
)
from .interval_types import (
    CascadeOutcome,
    DateConstraints,
    OwnershipRecord,
    ProposedUpdate,
    ValidationContext,
)
from .ownership_service import OwnershipService

__all__ = [
    "END_FIELD",
    "START_FIELD",
    "CascadeOutcome",
    "DateConstraints",
    "OwnerEditSession",
    "OwnerForm",
    "OwnershipRecord",
    "OwnershipService",
    "OwnershipValidationError",
    "ProposedUpdate",
    "SubmitResult",
    "ValidationContext",
    "apply_cascade",
    "cascade_adjust",
    "compute_add_constraints",
    "compute_edit_constraints",
    "find_current_owner",
    "find_neighbours",
    "required_date_errors",
    "sort_records",
    "validate_dates",
]
