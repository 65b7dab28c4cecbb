from __future__ import annotations

import pytest

from waitlist_admin.core.applicant import Applicant
from waitlist_admin.core.filter_builder import add_condition, add_subgroup, set_logic, update_condition
from waitlist_admin.core.filter_eval import apply_filter_tree
from waitlist_admin.core.filter_tree import (
    FilterCondition,
    FilterField,
    FilterGroup,
    FilterLogic,
    FilterOperator,
)
from waitlist_admin.core.list_state import (
    ListState,
    compute_waitlist_view,
    filter_applicants,
    resolve_selection,
)


def _people(n: int) -> list[Applicant]:
    return [
        Applicant(
            id=f"a{i:02d}",
            full_name=f"Person {i}",
            email=f"p{i}@example.com",
            batch="B1" if i % 2 else "B2",
            stage="registered",
        )
        for i in range(1, n + 1)
    ]


@pytest.fixture
def mixed() -> list[Applicant]:
    return [
        Applicant(id="1", full_name="Abel Tesfaye", email="abel@x.com", batch="B1", stage="1"),
        Applicant(id="2", full_name="Sara Bekele", email="sara@y.com", batch="B1", stage="Not Interested"),
        Applicant(id="3", full_name="Hanna Abebe", email="hanna@x.com", batch="B2", stage="rejected"),
        Applicant(id="4", full_name="Kidus Alemu", email="kidus@y.com", batch="B2", stage="approved"),
    ]


def test_transitions_reset_page_and_keep_other_fields():
    state = ListState(search_query="a", page=4, selected_id="x")

    assert state.with_search("b").page == 1
    assert state.with_batch("B1").page == 1
    assert state.with_stage("approved").page == 1
    assert state.reset_page().page == 1
    assert state.with_page(2).page == 2
    assert state.with_search("b").selected_id == "x"
    assert state.with_search(None).search_query == ""


def test_transitions_are_pure_and_order_independent():
    base = ListState()
    stale = base.with_search("ab")
    fresh = base.with_search("abe")
    # A stale update applied first is fully superseded by the fresh one.
    assert stale.with_search("abe") == fresh
    assert base == ListState()


def test_list_state_from_dict_is_robust():
    assert ListState.from_dict(None) == ListState()
    state = ListState.from_dict({"search_query": None, "page": "3", "selected_id": ""})
    assert state.page == 3
    assert state.selected_id is None
    assert ListState.from_dict({"page": "x"}).page == 1
    assert ListState.from_dict(ListState(search_query="q", page=2).to_dict()) == ListState(search_query="q", page=2)


def test_search_matches_name_or_email_case_insensitive(mixed):
    assert [a.id for a in filter_applicants(mixed, ListState(search_query="ABE"))] == ["1", "3"]
    assert [a.id for a in filter_applicants(mixed, ListState(search_query="@y.com"))] == ["2", "4"]
    assert len(filter_applicants(mixed, ListState(search_query="   "))) == 4


def test_stage_filter_normalises_aliases(mixed):
    for wanted in ("1", "Not Interested", "rejected"):
        ids = [a.id for a in filter_applicants(mixed, ListState(stage_filter=wanted))]
        assert ids == ["1", "2", "3"]


def test_batch_and_stage_intersect(mixed):
    ids = [a.id for a in filter_applicants(mixed, ListState(batch_filter="B2", stage_filter="rejected"))]
    assert ids == ["3"]


def test_resolve_selection():
    people = _people(3)
    assert resolve_selection(people, "a02").id == "a02"
    assert resolve_selection(people, "zzz").id == "a01"
    assert resolve_selection(people, "zzz", auto_select_first=False) is None
    assert resolve_selection([], "a01") is None


def test_view_clamps_page_and_slices():
    view = compute_waitlist_view(_people(23), ListState(page=99), page_size=10)
    assert view.pagination.safe_page == 3
    assert [a.id for a in view.page_items] == ["a21", "a22", "a23"]
    assert view.state.page == 3


def test_view_empty_collection():
    view = compute_waitlist_view([], ListState(page=3, selected_id="a01"), page_size=10)
    assert view.pagination.total_pages == 1
    assert view.page_items == []
    assert view.selected is None
    assert view.state.selected_id is None


def test_view_keeps_selection_on_visible_page():
    view = compute_waitlist_view(_people(23), ListState(page=2, selected_id="a15"), page_size=10)
    assert view.selected.id == "a15"


def test_view_moves_selection_onto_visible_page():
    view = compute_waitlist_view(_people(23), ListState(page=2, selected_id="a03"), page_size=10)
    assert view.selected.id == "a11"
    assert view.state.selected_id == "a11"


def test_view_without_auto_select():
    view = compute_waitlist_view(_people(5), ListState(selected_id="ghost"), page_size=10, auto_select_first=False)
    assert view.selected is None
    assert len(view.filtered_ids) == 5


def test_end_to_end_filter_tree_scenario():
    applicants = [
        Applicant(id="abel", full_name="Abel", age=24, current_employment_status="unemployed", batch="B1", stage="registered"),
        Applicant(id="sara", full_name="Sara", age=31, current_employment_status="employed", batch="B1", stage="approved"),
    ]

    root = FilterGroup(id="root")
    root = add_condition(
        root,
        "root",
        FilterCondition(id="age", field=FilterField.AGE, operator=FilterOperator.GREATER_THAN, value="25"),
    )
    assert [a.id for a in apply_filter_tree(applicants, root)] == ["sara"]

    root = add_subgroup(root, "root", FilterGroup(id="sub", logic=FilterLogic.OR))
    root = add_condition(root, "sub", FilterCondition(id="status", field=FilterField.STATUS))
    root = update_condition(
        root,
        FilterCondition(id="status", field=FilterField.STATUS, operator=FilterOperator.CONTAINS, value="unemployed"),
    )
    root = set_logic(root, "root", FilterLogic.OR)

    narrowed = apply_filter_tree(applicants, root)
    assert [a.id for a in narrowed] == ["abel", "sara"]

    view = compute_waitlist_view(narrowed, ListState(), page_size=7)
    assert view.selected.id == "abel"
    assert view.pagination.showing_to == 2
