from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, Union


class FilterLogic(str, Enum):
    AND = "and"
    OR = "or"


class FilterField(str, Enum):
    NAME = "name"
    AGE = "age"
    STATUS = "status"


class FilterOperator(str, Enum):
    EQUALS = "eq"
    CONTAINS = "contains"
    GREATER_THAN = "gt"
    LESS_THAN = "lt"
    DATE_AFTER = "after"
    DATE_BEFORE = "before"


# Older stored trees name the field after the applicant key
FIELD_ALIASES: Dict[str, FilterField] = {
    "fullName": FilterField.NAME,
    "full_name": FilterField.NAME,
    "currentEmploymentStatus": FilterField.STATUS,
}

FIELD_LABELS: Dict[FilterField, str] = {
    FilterField.NAME: "Full Name",
    FilterField.AGE: "Age",
    FilterField.STATUS: "Status",
}

DEFAULT_FIELD = FilterField.NAME
DEFAULT_OPERATOR = FilterOperator.EQUALS


def generate_filter_id() -> str:
    return uuid.uuid4().hex


def coerce_enum(enum_cls: Type[Enum], value: Any) -> Union[Enum, str]:
    # Unknown values stay raw strings; the evaluator treats them as "no match".
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


@dataclass(frozen=True)
class FilterCondition:
    """
    A single field/operator/value rule, the leaf of the filter tree.

    - id: opaque token, stable for the condition's lifetime
    - field: which applicant field is read (see FilterField)
    - operator: comparison to apply (see FilterOperator)
    - value: raw user input; numeric operators parse it on evaluation
    """

    id: str
    field: Union[FilterField, str] = DEFAULT_FIELD
    operator: Union[FilterOperator, str] = DEFAULT_OPERATOR
    value: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "field": getattr(self.field, "value", self.field),
            "operator": getattr(self.operator, "value", self.operator),
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FilterCondition:
        raw_field = data.get("field", DEFAULT_FIELD.value)
        filter_field = FIELD_ALIASES.get(raw_field) or coerce_enum(FilterField, raw_field)
        return cls(
            id=str(data.get("id") or generate_filter_id()),
            field=filter_field,
            operator=coerce_enum(FilterOperator, data.get("operator", DEFAULT_OPERATOR.value)),
            value="" if data.get("value") is None else str(data.get("value")),
        )


@dataclass(frozen=True)
class FilterGroup:
    """
    A branch of the filter tree: conditions and child groups combined by one logic mode.

    Children are owned by value (tuples), so a tree never shares or cycles.
    Every edit goes through ``core.filter_builder`` which returns a new tree.
    """

    id: str
    logic: Union[FilterLogic, str] = FilterLogic.AND
    conditions: Tuple[FilterCondition, ...] = field(default_factory=tuple)
    groups: Tuple[FilterGroup, ...] = field(default_factory=tuple)

    def is_empty(self) -> bool:
        return not self.conditions and not self.groups

    def find_group(self, group_id: str) -> Optional[FilterGroup]:
        if self.id == group_id:
            return self
        for child in self.groups:
            found = child.find_group(group_id)
            if found is not None:
                return found
        return None

    def find_condition(self, condition_id: str) -> Optional[FilterCondition]:
        for cond in self.conditions:
            if cond.id == condition_id:
                return cond
        for child in self.groups:
            found = child.find_condition(condition_id)
            if found is not None:
                return found
        return None

    def count_conditions(self) -> int:
        return len(self.conditions) + sum(g.count_conditions() for g in self.groups)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "logic": getattr(self.logic, "value", self.logic),
            "conditions": [c.to_dict() for c in self.conditions],
            "groups": [g.to_dict() for g in self.groups],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FilterGroup:
        return cls(
            id=str(data.get("id") or generate_filter_id()),
            logic=coerce_enum(FilterLogic, data.get("logic", FilterLogic.AND.value)),
            conditions=tuple(
                FilterCondition.from_dict(c) for c in (data.get("conditions") or [])
            ),
            groups=tuple(FilterGroup.from_dict(g) for g in (data.get("groups") or [])),
        )


def new_condition() -> FilterCondition:
    return FilterCondition(id=generate_filter_id())


def new_group(logic: FilterLogic = FilterLogic.AND) -> FilterGroup:
    return FilterGroup(id=generate_filter_id(), logic=logic)
