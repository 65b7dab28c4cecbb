from __future__ import annotations

import math
from typing import Any, Iterable, List, Optional

from .applicant import Applicant, as_text
from .filter_tree import FilterCondition, FilterField, FilterGroup, FilterLogic, FilterOperator, coerce_enum

NUMERIC_FIELDS = frozenset({FilterField.AGE})

_NUMERIC_OPERATORS = frozenset(
    {FilterOperator.EQUALS, FilterOperator.GREATER_THAN, FilterOperator.LESS_THAN}
)


def _to_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def field_value(applicant: Applicant, field: Any) -> Any:
    if field == FilterField.NAME:
        return applicant.full_name
    if field == FilterField.AGE:
        return applicant.age
    if field == FilterField.STATUS:
        return applicant.current_employment_status
    return ""


def matches_condition(applicant: Applicant, condition: FilterCondition) -> bool:
    """
    Decide whether a single rule holds for an applicant.

    Numeric fields compare parsed numbers and fail closed on anything that is
    not a finite number. Text fields compare trimmed, lower-cased strings;
    ``contains`` with an empty value matches everything. Date operators and
    text ``gt``/``lt`` never match.
    """
    field = coerce_enum(FilterField, condition.field)
    operator = coerce_enum(FilterOperator, condition.operator)
    if not isinstance(field, FilterField) or not isinstance(operator, FilterOperator):
        return False

    value = as_text(condition.value).strip()
    left = field_value(applicant, field)

    if field in NUMERIC_FIELDS:
        if operator not in _NUMERIC_OPERATORS:
            return False
        num_left = _to_number(left)
        num_right = _to_number(value)
        if num_left is None or num_right is None:
            return False
        if operator == FilterOperator.EQUALS:
            return num_left == num_right
        if operator == FilterOperator.GREATER_THAN:
            return num_left > num_right
        return num_left < num_right

    text_left = as_text(left).strip().lower()
    text_right = value.lower()

    if operator == FilterOperator.EQUALS:
        return text_left == text_right
    if operator == FilterOperator.CONTAINS:
        return text_right in text_left if text_right else True

    # No date-typed field exists yet, and text ordering is not supported.
    return False


def matches_group(applicant: Applicant, group: FilterGroup) -> bool:
    results = [matches_condition(applicant, c) for c in group.conditions]
    results.extend(matches_group(applicant, g) for g in group.groups)
    if not results:
        return True
    if group.logic == FilterLogic.OR:
        return any(results)
    if group.logic == FilterLogic.AND:
        return all(results)
    return False


def apply_filter_tree(
    applicants: Iterable[Applicant],
    tree: Optional[FilterGroup],
) -> List[Applicant]:
    """Keep applicants matching the tree; ``None`` means no advanced filter."""
    if tree is None:
        return list(applicants)
    return [a for a in applicants if matches_group(a, tree)]
