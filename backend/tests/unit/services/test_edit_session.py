"""Tests for the admin owner edit session."""

from datetime import date

import pytest
from pydantic import ValidationError

from gemvault.schemas import OwnerUpdate
from gemvault.services.ownership import (
    END_FIELD,
    START_FIELD,
    OwnerEditSession,
    OwnerForm,
    OwnershipRecord,
)
from gemvault.services.shared.http_client import HTTPClientError

TODAY = date(2024, 6, 1)
GEMSTONE_ID = 7


class FakeOwnersAPI:
    """In-memory stand-in for the owner endpoints."""

    def __init__(self, owners):
        self.owners = {o["id"]: dict(o) for o in owners}
        self.calls = []
        self.fail_update_ids = set()
        self.fail_add = False

    def get_owners(self, gemstone_id):
        self.calls.append(("get", gemstone_id))
        # Newest first, so the session has to sort
        return sorted(self.owners.values(), key=lambda o: o["ownership_start_date"], reverse=True)

    def add_owner(self, gemstone_id, data):
        self.calls.append(("add", gemstone_id, data))
        if self.fail_add:
            raise HTTPClientError("HTTP 500: Internal Server Error", status_code=500)
        new_id = max(self.owners, default=0) + 1
        record = {**data, "id": new_id, "is_current_owner": bool(data.get("is_transfer"))}
        self.owners[new_id] = record
        return record

    def update_owner(self, gemstone_id, owner_id, data):
        self.calls.append(("update", owner_id, data))
        if owner_id in self.fail_update_ids:
            raise HTTPClientError("HTTP 503: Service Unavailable", status_code=503)
        self.owners[owner_id].update(data)
        return self.owners[owner_id]


def owner(id, start, end=None, current=False):
    return {
        "id": id,
        "owner_name": f"Owner {id}",
        "owner_phone": "0812",
        "owner_email": None,
        "owner_address": None,
        "ownership_start_date": start,
        "ownership_end_date": end,
        "is_current_owner": current,
        "notes": None,
    }


@pytest.fixture
def api():
    return FakeOwnersAPI(
        [
            owner(1, "2024-01-01", "2024-02-01T00:00:00.000Z"),
            owner(2, "2024-02-01", "2024-03-01"),
            owner(3, "2024-03-01", current=True),
        ]
    )


@pytest.fixture
def session(api):
    session = OwnerEditSession(api, GEMSTONE_ID, today=TODAY)
    session.load()
    return session


def form(start, end=None, is_transfer=False, **fields):
    return OwnerForm(
        owner_name=fields.get("owner_name", "Dewi"),
        owner_phone=fields.get("owner_phone", "0815"),
        owner_email=fields.get("owner_email", ""),
        ownership_start_date=start,
        ownership_end_date=end,
        is_transfer=is_transfer,
    )


class TestLoad:
    def test_records_are_sorted_and_dates_trimmed(self, session):
        assert [r.id for r in session.records] == [1, 2, 3]
        assert session.records[0].ownership_end_date == date(2024, 2, 1)
        assert session.current_owner.id == 3

    def test_find_unknown_owner(self, session):
        with pytest.raises(LookupError):
            session.find(99)


class TestOwnerForm:
    def test_from_record_drops_current_owner_end(self):
        record = OwnershipRecord(
            id=1,
            ownership_start_date=date(2024, 1, 1),
            ownership_end_date=date(2024, 2, 1),
            is_current_owner=True,
            owner_name="Rina",
            owner_phone="0811",
        )
        prefilled = OwnerForm.from_record(record)
        assert prefilled.ownership_end_date is None
        assert prefilled.owner_email == ""

    def test_apply_template_keeps_dates_and_mode(self, session):
        original = form(date(2024, 4, 1), is_transfer=True)
        filled = original.apply_template(session.records[0])

        assert filled.owner_name == "Owner 1"
        assert filled.ownership_start_date == date(2024, 4, 1)
        assert filled.is_transfer is True

    def test_contact_errors(self):
        errors = form(date(2024, 1, 1), owner_name=" ", owner_phone="", owner_email="bad").contact_errors()
        assert set(errors) == {"owner_name", "owner_phone", "owner_email"}

    @pytest.mark.parametrize(
        "email, valid",
        [
            ("rina@example.com", True),
            ("", True),
            ("a..b@example.com", False),
            ("user@-bad-.com", False),
            (".a@example.com", False),
        ],
    )
    def test_email_check_matches_owner_schema(self, email, valid):
        errors = form(date(2024, 1, 1), owner_email=email).contact_errors()
        assert ("owner_email" not in errors) is valid

        try:
            OwnerUpdate(owner_name="Rina", owner_phone="0811", owner_email=email)
        except ValidationError:
            server_valid = False
        else:
            server_valid = True
        assert server_valid is valid

    def test_add_payload_for_transfer_has_no_end(self):
        payload = form(date(2024, 4, 1), date(2024, 5, 1), is_transfer=True).add_payload()
        assert payload["ownership_start_date"] == "2024-04-01"
        assert payload["ownership_end_date"] is None
        assert payload["is_transfer"] is True


class TestValidate:
    def test_transfer_floor(self, session):
        errors = session.validate_add(form(date(2024, 2, 15), is_transfer=True))
        assert "current owner's start date" in errors[START_FIELD]
        assert session.validate_add(form(date(2024, 4, 1), is_transfer=True)) == {}

    def test_history_end_required(self, session):
        errors = session.validate_add(form(date(2023, 1, 1)))
        assert errors == {END_FIELD: "End date is required when adding a previous owner"}

    def test_edit_constraints_follow_neighbours(self, session):
        constraints = session.constraints_for_edit(2)
        assert constraints.min_start_date == date(2024, 1, 1)
        assert constraints.max_end_date == date(2024, 3, 1)

    def test_edit_validation_is_repeatable(self, session):
        bad = form(date(2023, 12, 1), date(2024, 4, 1))
        assert session.validate_edit(2, bad) == session.validate_edit(2, bad)
        assert set(session.validate_edit(2, bad)) == {START_FIELD, END_FIELD}


class TestSubmitAdd:
    def test_invalid_form_makes_no_calls(self, api, session):
        api.calls.clear()
        result = session.submit_add(form(date(2024, 2, 15), is_transfer=True))

        assert result.ok is False
        assert START_FIELD in result.errors
        assert api.calls == []

    def test_success_refetches_records(self, api, session):
        api.calls.clear()
        result = session.submit_add(form(date(2024, 4, 1), is_transfer=True))

        assert result.ok is True
        assert [c[0] for c in api.calls] == ["add", "get"]
        assert api.calls[0][2]["ownership_end_date"] is None
        assert len(session.records) == 4

    def test_primary_failure_propagates(self, api, session):
        api.fail_add = True
        with pytest.raises(HTTPClientError):
            session.submit_add(form(date(2024, 4, 1), is_transfer=True))


class TestSubmitEdit:
    def test_edit_then_cascade_previous_then_next(self, api, session):
        api.calls.clear()
        result = session.submit_edit(2, form(date(2024, 1, 20), date(2024, 2, 20)))

        assert result.ok is True
        assert [(c[0], c[1]) for c in api.calls[:3]] == [
            ("update", 2),
            ("update", 1),
            ("update", 3),
        ]
        assert api.calls[-1][0] == "get"
        assert api.owners[1]["ownership_end_date"] == "2024-01-20"
        assert api.owners[3]["ownership_start_date"] == "2024-02-20"
        assert api.owners[3]["ownership_end_date"] is None
        assert [p.record.id for p in result.cascaded] == [1, 3]

    def test_no_cascade_when_boundaries_already_match(self, api, session):
        api.calls.clear()
        result = session.submit_edit(2, form(date(2024, 2, 1), date(2024, 3, 1), owner_name="B"))

        assert result.ok is True
        assert result.cascaded == []
        assert [c[0] for c in api.calls] == ["update", "get"]

    def test_cascade_failure_is_reported_not_raised(self, api, session):
        api.fail_update_ids = {1}
        result = session.submit_edit(2, form(date(2024, 1, 20), date(2024, 2, 20)))

        assert result.ok is True
        assert [p.record.id for p, _ in result.cascade_failures] == [1]
        assert [p.record.id for p in result.cascaded] == [3]
        assert api.owners[2]["ownership_start_date"] == "2024-01-20"

    def test_primary_failure_skips_cascade(self, api, session):
        api.fail_update_ids = {2}
        api.calls.clear()

        with pytest.raises(HTTPClientError):
            session.submit_edit(2, form(date(2024, 1, 20), date(2024, 2, 20)))
        assert [(c[0], c[1]) for c in api.calls] == [("update", 2)]

    def test_current_owner_edit_sends_no_end(self, api, session):
        result = session.submit_edit(3, form(date(2024, 3, 10), date(2024, 5, 1)))

        assert result.ok is True
        assert api.owners[3]["ownership_end_date"] is None
        assert api.owners[2]["ownership_end_date"] == "2024-03-10"

    def test_invalid_edit_returns_errors(self, api, session):
        api.calls.clear()
        result = session.submit_edit(1, form(date(2024, 1, 1)))

        assert result.ok is False
        assert result.errors == {END_FIELD: "End date is required for a former owner"}
        assert api.calls == []
