from __future__ import annotations

import pytest

from waitlist_admin.core.applicant import Applicant
from waitlist_admin.core.filter_eval import apply_filter_tree, matches_condition, matches_group
from waitlist_admin.core.filter_tree import (
    FilterCondition,
    FilterField,
    FilterGroup,
    FilterLogic,
    FilterOperator,
)


def _applicant(applicant_id: str = "a1", **kwargs) -> Applicant:
    defaults = dict(
        full_name="Abebe Kebede",
        email="abebe@example.com",
        age=31,
        current_employment_status="Unemployed",
    )
    defaults.update(kwargs)
    return Applicant(id=applicant_id, **defaults)


def _cond(field, operator, value="", cond_id="c1") -> FilterCondition:
    return FilterCondition(id=cond_id, field=field, operator=operator, value=value)


@pytest.mark.parametrize(
    "age, operator, value, expected",
    [
        (31, FilterOperator.GREATER_THAN, "30", True),
        (30, FilterOperator.GREATER_THAN, "30", False),
        (29, FilterOperator.LESS_THAN, " 30 ", True),
        (30, FilterOperator.EQUALS, "30.0", True),
        ("31", FilterOperator.GREATER_THAN, "30", True),
    ],
)
def test_numeric_comparisons(age, operator, value, expected):
    assert matches_condition(_applicant(age=age), _cond(FilterField.AGE, operator, value)) is expected


@pytest.mark.parametrize("age", [None, "abc", "", float("nan"), True])
def test_numeric_fails_closed_on_bad_record_value(age):
    applicant = _applicant(age=age)
    for op in (FilterOperator.EQUALS, FilterOperator.GREATER_THAN, FilterOperator.LESS_THAN):
        assert matches_condition(applicant, _cond(FilterField.AGE, op, "30")) is False


@pytest.mark.parametrize("value", ["", "thirty", "inf"])
def test_numeric_fails_closed_on_bad_condition_value(value):
    assert matches_condition(_applicant(age=31), _cond(FilterField.AGE, FilterOperator.EQUALS, value)) is False


def test_numeric_field_rejects_text_and_date_operators():
    applicant = _applicant(age=31)
    for op in (FilterOperator.CONTAINS, FilterOperator.DATE_AFTER, FilterOperator.DATE_BEFORE):
        assert matches_condition(applicant, _cond(FilterField.AGE, op, "3")) is False


def test_text_equals_is_trimmed_and_case_insensitive():
    applicant = _applicant(full_name="  Abebe Kebede ")
    assert matches_condition(applicant, _cond(FilterField.NAME, FilterOperator.EQUALS, "abebe KEBEDE"))
    assert not matches_condition(applicant, _cond(FilterField.NAME, FilterOperator.EQUALS, "abebe"))


def test_text_contains_and_empty_value_is_vacuous():
    applicant = _applicant(current_employment_status="Unemployed - looking")
    assert matches_condition(applicant, _cond(FilterField.STATUS, FilterOperator.CONTAINS, "UNEMPLOYED"))
    assert matches_condition(applicant, _cond(FilterField.STATUS, FilterOperator.CONTAINS, ""))
    assert not matches_condition(applicant, _cond(FilterField.STATUS, FilterOperator.CONTAINS, "student"))


def test_text_ordering_and_date_operators_never_match():
    applicant = _applicant(full_name="Zed")
    for op in (
        FilterOperator.GREATER_THAN,
        FilterOperator.LESS_THAN,
        FilterOperator.DATE_AFTER,
        FilterOperator.DATE_BEFORE,
    ):
        assert matches_condition(applicant, _cond(FilterField.NAME, op, "a")) is False


def test_missing_text_field_reads_as_empty_string():
    applicant = _applicant(current_employment_status="")
    assert matches_condition(applicant, _cond(FilterField.STATUS, FilterOperator.EQUALS, ""))


def test_raw_string_field_and_operator_are_accepted():
    applicant = _applicant(full_name="Hanna")
    assert matches_condition(applicant, _cond("name", "eq", "hanna"))


def test_unknown_field_or_operator_never_matches():
    applicant = _applicant()
    assert matches_condition(applicant, _cond("salary", FilterOperator.CONTAINS, "")) is False
    assert matches_condition(applicant, _cond(FilterField.NAME, "startswith", "")) is False


def test_empty_group_matches_everything():
    group = FilterGroup(id="root")
    assert matches_group(_applicant(), group)
    assert matches_group(_applicant(), FilterGroup(id="root", logic="xor"))


def test_and_or_semantics():
    yes = _cond(FilterField.NAME, FilterOperator.CONTAINS, "abebe", "c1")
    no = _cond(FilterField.NAME, FilterOperator.CONTAINS, "hanna", "c2")
    applicant = _applicant()

    assert matches_group(applicant, FilterGroup(id="g", logic=FilterLogic.OR, conditions=(yes, no)))
    assert not matches_group(applicant, FilterGroup(id="g", logic=FilterLogic.AND, conditions=(yes, no)))
    assert matches_group(applicant, FilterGroup(id="g", logic=FilterLogic.AND, conditions=(yes,)))


def test_unknown_logic_with_children_never_matches():
    yes = _cond(FilterField.NAME, FilterOperator.CONTAINS, "abebe")
    assert not matches_group(_applicant(), FilterGroup(id="g", logic="xor", conditions=(yes,)))


def test_nested_groups_combine_with_parent_logic():
    # name contains "a" AND (age > 40 OR status contains "unemployed")
    inner = FilterGroup(
        id="inner",
        logic=FilterLogic.OR,
        conditions=(
            _cond(FilterField.AGE, FilterOperator.GREATER_THAN, "40", "c2"),
            _cond(FilterField.STATUS, FilterOperator.CONTAINS, "unemployed", "c3"),
        ),
    )
    root = FilterGroup(
        id="root",
        logic=FilterLogic.AND,
        conditions=(_cond(FilterField.NAME, FilterOperator.CONTAINS, "a", "c1"),),
        groups=(inner,),
    )

    assert matches_group(_applicant(age=25, current_employment_status="Unemployed"), root)
    assert matches_group(_applicant(age=45, current_employment_status="Employed"), root)
    assert not matches_group(_applicant(age=25, current_employment_status="Employed"), root)


def test_empty_nested_group_counts_as_true_child():
    root = FilterGroup(
        id="root",
        logic=FilterLogic.AND,
        conditions=(_cond(FilterField.NAME, FilterOperator.CONTAINS, "abebe"),),
        groups=(FilterGroup(id="empty"),),
    )
    assert matches_group(_applicant(), root)


def test_apply_filter_tree_preserves_order_and_none_is_identity():
    people = [
        _applicant("a1", full_name="Hanna"),
        _applicant("a2", full_name="Abebe"),
        _applicant("a3", full_name="Hailu"),
    ]
    tree = FilterGroup(
        id="root",
        conditions=(_cond(FilterField.NAME, FilterOperator.CONTAINS, "ha"),),
    )

    assert [a.id for a in apply_filter_tree(people, tree)] == ["a1", "a3"]
    assert [a.id for a in apply_filter_tree(people, None)] == ["a1", "a2", "a3"]


def test_deeply_nested_empty_groups_match_everything():
    group = FilterGroup(id="leaf")
    for depth in range(6):
        logic = FilterLogic.OR if depth % 2 else FilterLogic.AND
        group = FilterGroup(id=f"g{depth}", logic=logic, groups=(group,))
    assert matches_group(_applicant(age=None, full_name=""), group)
