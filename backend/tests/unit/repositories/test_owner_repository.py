"""Tests for OwnerRepository."""

from datetime import date

import pytest

from gemvault.services.repositories import NotFoundError, OwnerRepository


@pytest.fixture
def repo(db):
    return OwnerRepository(db)


@pytest.fixture
def gemstone(db, gemstone_factory):
    return gemstone_factory(db)


def test_find_by_gemstone_is_chronological(db, repo, gemstone, owner_factory):
    later = owner_factory(db, gemstone.id, "Later", date(2024, 3, 1), current=True)
    earlier = owner_factory(db, gemstone.id, "Earlier", date(2024, 1, 1), date(2024, 3, 1))

    assert [o.id for o in repo.find_by_gemstone(gemstone.id)] == [earlier.id, later.id]
    assert repo.find_current(gemstone.id).id == later.id


def test_get_for_gemstone_checks_ownership(db, repo, gemstone, gemstone_factory, owner_factory):
    owner = owner_factory(db, gemstone.id, "A", date(2024, 1, 1))
    other = gemstone_factory(db, "GEM-2-OTHER0")

    assert repo.get_for_gemstone(gemstone.id, owner.id).id == owner.id
    assert repo.find_for_gemstone(other.id, owner.id) is None
    with pytest.raises(NotFoundError, match="Owner not found"):
        repo.get_for_gemstone(other.id, owner.id)


def test_find_contacts_is_distinct_by_name_and_phone(db, repo, gemstone, owner_factory):
    owner_factory(db, gemstone.id, "Rina", date(2024, 1, 1), date(2024, 2, 1), phone="0811")
    owner_factory(db, gemstone.id, "rina ", date(2024, 2, 1), date(2024, 3, 1), phone="0811")
    owner_factory(db, gemstone.id, "Rina", date(2024, 3, 1), current=True, phone="0822")

    contacts = repo.find_contacts()

    assert sorted(c.owner_phone for c in contacts) == ["0811", "0822"]


def test_find_recent_and_count(db, repo, gemstone, owner_factory):
    for day in range(1, 4):
        owner_factory(db, gemstone.id, f"Owner {day}", date(2024, 1, day), date(2024, 1, day + 1))

    assert repo.count() == 3
    assert len(repo.find_recent(limit=2)) == 2
