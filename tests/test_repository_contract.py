"""
Behaviour shared by the JSON and SQL backends (see the ``repo`` fixture).
"""
from __future__ import annotations

from datetime import datetime, timezone


def test_create_then_get_returns_empty_history(repo):
    created = repo.create("Jane Doe", "555-0100")

    fetched = repo.get_by_id(created.id)
    assert fetched is not None
    assert fetched.id == created.id
    assert fetched.name == "Jane Doe"
    assert fetched.phone_number == "555-0100"
    assert fetched.preferred_styles == []
    assert fetched.notes == ""
    assert fetched.service_history == []


def test_create_keeps_styles_and_notes(repo):
    created = repo.create("Bob Smith", "555-0200", ["Fade", "Beard Trim"], "allergic to dye")
    fetched = repo.get_by_id(created.id)
    assert fetched.preferred_styles == ["Fade", "Beard Trim"]
    assert fetched.notes == "allergic to dye"


def test_missing_lookups_return_sentinels(repo):
    assert repo.get_by_id("missing") is None
    assert repo.get_by_phone("000-0000") is None
    assert repo.list_all() == []


def test_get_by_phone(repo):
    created = repo.create("Jane Doe", "555-0100")
    found = repo.get_by_phone("555-0100")
    assert found is not None
    assert found.id == created.id


def test_list_all_is_ordered_by_name(repo):
    repo.create("Zoe Park", "555-0300")
    repo.create("Adam West", "555-0301")
    repo.create("Maria Lopez", "555-0302")
    assert [c.name for c in repo.list_all()] == ["Adam West", "Maria Lopez", "Zoe Park"]


def test_search_by_name_is_case_insensitive_substring(repo):
    repo.create("Jane Doe", "555-0100")
    repo.create("Bob Smith", "555-0200")
    repo.create("Janet Ray", "555-0400")

    results = repo.search_by_name("jan")
    assert [c.name for c in results] == ["Jane Doe", "Janet Ray"]
    assert repo.search_by_name("SMITH")[0].name == "Bob Smith"


def test_search_with_blank_or_wildcard_term_matches_nothing(repo):
    repo.create("Jane Doe", "555-0100")
    assert repo.search_by_name("") == []
    assert repo.search_by_name("   ") == []
    assert repo.search_by_name("%") == []


def test_add_visit_appends_exactly_one(repo):
    customer = repo.create("Jane Doe", "555-0100")
    before = datetime.now(timezone.utc)

    visit = repo.add_visit(customer.id, ["Haircut", "Beard Trim"], "regular")

    assert visit is not None
    assert visit.services_taken == ["Haircut", "Beard Trim"]
    assert visit.notes == "regular"
    assert visit.date >= before
    history = repo.get_by_id(customer.id).service_history
    assert len(history) == 1
    assert history[0].services_taken == ["Haircut", "Beard Trim"]


def test_add_visit_allows_empty_service_list(repo):
    customer = repo.create("Jane Doe", "555-0100")
    visit = repo.add_visit(customer.id, [])
    assert visit is not None
    assert visit.services_taken == []


def test_visits_keep_append_order(repo):
    customer = repo.create("Jane Doe", "555-0100")
    repo.add_visit(customer.id, ["Haircut"])
    repo.add_visit(customer.id, ["Color"])
    history = repo.get_by_id(customer.id).service_history
    assert [v.services_taken for v in history] == [["Haircut"], ["Color"]]


def test_add_visit_on_missing_customer_creates_nothing(repo):
    assert repo.add_visit("missing", ["Haircut"]) is None
    assert repo.list_all() == []


def test_update_changes_only_given_fields(repo):
    customer = repo.create("Jane Doe", "555-0100", ["Bob"], "first notes")

    updated = repo.update(customer.id, {"notes": "second notes", "preferredStyles": ["Pixie"]})

    assert updated.notes == "second notes"
    assert updated.preferred_styles == ["Pixie"]
    assert updated.name == "Jane Doe"
    assert updated.phone_number == "555-0100"
    assert repo.get_by_id(customer.id).notes == "second notes"


def test_update_with_empty_partial_is_a_no_op(repo):
    customer = repo.create("Jane Doe", "555-0100", ["Bob"], "notes")
    repo.add_visit(customer.id, ["Haircut"])
    before = repo.get_by_id(customer.id)

    updated = repo.update(customer.id, {})

    assert updated == before
    assert repo.get_by_id(customer.id) == before


def test_update_ignores_falsy_and_unknown_fields(repo):
    customer = repo.create("Jane Doe", "555-0100", ["Bob"], "notes")
    updated = repo.update(customer.id, {"name": "", "notes": None, "preferredStyles": [], "id": "other", "color": "red"})
    assert updated.id == customer.id
    assert updated.name == "Jane Doe"
    assert updated.notes == "notes"
    assert updated.preferred_styles == ["Bob"]


def test_update_missing_customer_returns_none(repo):
    assert repo.update("missing", {"name": "Nobody"}) is None


def test_delete_removes_customer_and_visits(repo):
    keep = repo.create("Bob Smith", "555-0200")
    gone = repo.create("Jane Doe", "555-0100")
    repo.add_visit(gone.id, ["Haircut"])

    assert repo.delete(gone.id) is True

    assert [c.id for c in repo.list_all()] == [keep.id]
    assert repo.get_by_id(gone.id) is None
    assert repo.add_visit(gone.id, ["Color"]) is None


def test_delete_missing_returns_false(repo):
    repo.create("Jane Doe", "555-0100")
    assert repo.delete("missing") is False
    assert len(repo.list_all()) == 1
