"""Owner edit session - the admin panel's add/edit owner workflow over the API.

One session covers one gemstone. It fetches the ownership records, derives
date windows for the form, validates locally before anything is sent, submits
the add or edit, pushes the edited boundaries onto neighbouring owners, and
refetches the records after every successful change.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Protocol

from pydantic import EmailStr, TypeAdapter, ValidationError

from gemvault.services.ownership.interval_service import (
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
from gemvault.services.ownership.interval_types import (
    DateConstraints,
    OwnershipRecord,
    ProposedUpdate,
    ValidationContext,
)
from gemvault.services.shared.date_utils import to_iso_date, today_in_zone

logger = logging.getLogger(__name__)

# Same rule the owner schemas apply server side.
_EMAIL_ADAPTER = TypeAdapter(EmailStr)


class OwnersAPI(Protocol):
    """The owner endpoints the session needs (see GemvaultAPIClient)."""

    def get_owners(self, gemstone_id: int) -> list[dict[str, Any]]: ...

    def add_owner(self, gemstone_id: int, data: dict[str, Any]) -> dict[str, Any]: ...

    def update_owner(
        self, gemstone_id: int, owner_id: int | str, data: dict[str, Any]
    ) -> dict[str, Any]: ...


@dataclass
class OwnerForm:
    """Values of the add/edit owner form."""

    owner_name: str = ""
    owner_phone: str = ""
    owner_email: str = ""
    owner_address: str = ""
    ownership_start_date: date | None = None
    ownership_end_date: date | None = None
    notes: str = ""
    is_transfer: bool = False

    @classmethod
    def from_record(cls, record: OwnershipRecord) -> "OwnerForm":
        """Prefill for editing; the current owner has no end date to edit."""
        return cls(
            owner_name=record.owner_name,
            owner_phone=record.owner_phone,
            owner_email=record.owner_email or "",
            owner_address=record.owner_address or "",
            ownership_start_date=record.ownership_start_date,
            ownership_end_date=None if record.is_current_owner else record.ownership_end_date,
            notes=record.notes or "",
        )

    def apply_template(self, template: OwnershipRecord) -> "OwnerForm":
        """Copy contact details from an existing owner, keeping dates and mode."""
        return replace(
            self,
            owner_name=template.owner_name,
            owner_phone=template.owner_phone,
            owner_email=template.owner_email or "",
            owner_address=template.owner_address or "",
            notes=template.notes or "",
        )

    def contact_errors(self) -> dict[str, str]:
        errors = {}
        if not self.owner_name.strip():
            errors["owner_name"] = "Owner name is required"
        if not self.owner_phone.strip():
            errors["owner_phone"] = "Phone number is required"
        if self.owner_email.strip():
            try:
                _EMAIL_ADAPTER.validate_python(self.owner_email)
            except ValidationError:
                errors["owner_email"] = "Email format is invalid"
        return errors

    def _contact_payload(self) -> dict[str, Any]:
        return {
            "owner_name": self.owner_name.strip(),
            "owner_phone": self.owner_phone.strip(),
            "owner_email": self.owner_email,
            "owner_address": self.owner_address,
            "notes": self.notes,
        }

    def add_payload(self) -> dict[str, Any]:
        """POST body; a transfer never carries an end date."""
        return {
            **self._contact_payload(),
            "ownership_start_date": to_iso_date(self.ownership_start_date),
            "ownership_end_date": (
                None if self.is_transfer else to_iso_date(self.ownership_end_date)
            ),
            "is_transfer": self.is_transfer,
        }

    def update_payload(self, is_current_owner: bool) -> dict[str, Any]:
        """PUT body; the current owner never carries an end date."""
        return {
            **self._contact_payload(),
            "ownership_start_date": to_iso_date(self.ownership_start_date),
            "ownership_end_date": (
                None if is_current_owner else to_iso_date(self.ownership_end_date)
            ),
        }


@dataclass
class SubmitResult:
    """Outcome of submitting the form."""

    ok: bool
    errors: dict[str, str] = field(default_factory=dict)
    saved: dict[str, Any] | None = None
    cascaded: list[ProposedUpdate] = field(default_factory=list)
    cascade_failures: list[tuple[ProposedUpdate, str]] = field(default_factory=list)


class OwnerEditSession:
    """Add/edit workflow for the owners of one gemstone."""

    def __init__(self, api: OwnersAPI, gemstone_id: int, today: date | None = None) -> None:
        self._api = api
        self.gemstone_id = gemstone_id
        self._today = today
        self.records: list[OwnershipRecord] = []

    @property
    def today(self) -> date:
        return self._today or today_in_zone()

    @property
    def current_owner(self) -> OwnershipRecord | None:
        return find_current_owner(self.records)

    def load(self) -> list[OwnershipRecord]:
        """Fetch the gemstone's owners and sort them chronologically."""
        payload = self._api.get_owners(self.gemstone_id)
        self.records = sort_records([OwnershipRecord.from_api(item) for item in payload])
        logger.debug(f"Loaded {len(self.records)} owners for gemstone {self.gemstone_id}")
        return self.records

    def find(self, owner_id: int | str) -> OwnershipRecord:
        index, _, _ = find_neighbours(self.records, owner_id)
        if index == -1:
            raise LookupError(f"Owner {owner_id} is not loaded for gemstone {self.gemstone_id}")
        return self.records[index]

    def constraints_for_add(self, is_transfer: bool) -> DateConstraints:
        return compute_add_constraints(self.records, is_transfer)

    def constraints_for_edit(self, owner_id: int | str) -> DateConstraints:
        return compute_edit_constraints(self.records, self.find(owner_id), self.today)

    def validate_add(self, form: OwnerForm) -> dict[str, str]:
        """Field errors for adding the form as a new owner."""
        context = ValidationContext.for_add(form.is_transfer)
        end = None if form.is_transfer else form.ownership_end_date

        errors = form.contact_errors()
        errors.update(
            required_date_errors(
                context,
                has_current_owner=self.current_owner is not None,
                editing_current_owner=False,
                candidate_start=form.ownership_start_date,
                candidate_end=end,
            )
        )
        errors.update(
            validate_dates(
                form.ownership_start_date,
                end,
                self.constraints_for_add(form.is_transfer),
                context,
            )
        )
        return errors

    def validate_edit(self, owner_id: int | str, form: OwnerForm) -> dict[str, str]:
        """Field errors for saving the form over an existing owner."""
        target = self.find(owner_id)
        end = None if target.is_current_owner else form.ownership_end_date

        errors = form.contact_errors()
        errors.update(
            required_date_errors(
                ValidationContext.EDIT,
                has_current_owner=self.current_owner is not None,
                editing_current_owner=target.is_current_owner,
                candidate_start=form.ownership_start_date,
                candidate_end=end,
            )
        )
        errors.update(
            validate_dates(
                form.ownership_start_date,
                end,
                compute_edit_constraints(self.records, target, self.today),
                ValidationContext.EDIT,
            )
        )
        return errors

    def submit_add(self, form: OwnerForm) -> SubmitResult:
        """Validate and add a new owner.

        Raises:
            HTTPClientError: If the add call fails; the form is left untouched
        """
        errors = self.validate_add(form)
        if errors:
            return SubmitResult(ok=False, errors=errors)

        saved = self._api.add_owner(self.gemstone_id, form.add_payload())
        logger.info(
            f"{'Transferred ownership' if form.is_transfer else 'Added owner'} "
            f"for gemstone {self.gemstone_id}"
        )
        self.load()
        return SubmitResult(ok=True, saved=saved)

    def submit_edit(self, owner_id: int | str, form: OwnerForm) -> SubmitResult:
        """Validate, save the edit, then cascade boundary dates to neighbours.

        The edit is saved before any neighbour is touched. Neighbour updates
        are sent one by one (previous, then next); a failed one is logged and
        reported in the result without undoing anything.

        Raises:
            HTTPClientError: If the primary update fails; no cascade is attempted
        """
        errors = self.validate_edit(owner_id, form)
        if errors:
            return SubmitResult(ok=False, errors=errors)

        target = self.find(owner_id)
        payload = form.update_payload(target.is_current_owner)
        saved = self._api.update_owner(self.gemstone_id, target.id, payload)

        new_end = None if target.is_current_owner else form.ownership_end_date
        proposals = cascade_adjust(
            target, form.ownership_start_date, new_end, self.records, self.today
        )
        outcome = apply_cascade(
            proposals,
            lambda p: self._api.update_owner(self.gemstone_id, p.record.id, p.payload()),
        )
        if outcome.failed:
            logger.warning(
                f"{len(outcome.failed)} neighbouring owner(s) of gemstone {self.gemstone_id} "
                "need manual date correction"
            )

        self.load()
        return SubmitResult(
            ok=True,
            saved=saved,
            cascaded=outcome.applied,
            cascade_failures=outcome.failed,
        )
