from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from waitlist_admin.core.applicant import Applicant, batch_options
from waitlist_admin.core.filter_builder import (
    add_condition,
    add_subgroup,
    remove_condition,
    remove_subgroup,
    set_logic,
    update_condition,
)
from waitlist_admin.core.filter_eval import apply_filter_tree
from waitlist_admin.core.filter_tree import (
    FIELD_LABELS,
    FilterField,
    FilterGroup,
    FilterLogic,
    FilterOperator,
    coerce_enum,
    new_group,
)
from waitlist_admin.core.list_state import ListState, WaitlistView, compute_waitlist_view
from waitlist_admin.core.stages import STAGE_OPTIONS
from waitlist_admin.services.backend import MutationResult
from waitlist_admin.services.export_service import AVAILABLE_FIELDS
from waitlist_admin.ui.ids import IDs

logger = logging.getLogger(__name__)

OPERATOR_LABELS: Dict[FilterOperator, str] = {
    FilterOperator.EQUALS: "Equals",
    FilterOperator.CONTAINS: "Contains",
    FilterOperator.GREATER_THAN: "Greater than",
    FilterOperator.LESS_THAN: "Less than",
    FilterOperator.DATE_AFTER: "After",
    FilterOperator.DATE_BEFORE: "Before",
}

ALL_OPTION = {"label": "All", "value": ""}


# ---------------------------------------------------------------------------
# Store parsing
# ---------------------------------------------------------------------------

def safe_filter_tree(data: object) -> Optional[FilterGroup]:
    if not isinstance(data, dict) or not data:
        return None
    try:
        return FilterGroup.from_dict(data)
    except (TypeError, AttributeError, ValueError):
        logger.exception("Invalid filter-tree store: %r", data)
        return None


def tree_or_new(data: object) -> FilterGroup:
    return safe_filter_tree(data) or new_group()


def safe_list_state(data: object) -> ListState:
    return ListState.from_dict(data if isinstance(data, dict) else None)


# ---------------------------------------------------------------------------
# Dropdown options
# ---------------------------------------------------------------------------

def field_options() -> List[dict]:
    return [{"label": FIELD_LABELS[f], "value": f.value} for f in FilterField]


def operator_options() -> List[dict]:
    return [{"label": OPERATOR_LABELS[op], "value": op.value} for op in FilterOperator]


def stage_dropdown_options(include_all: bool = True) -> List[dict]:
    options = [{"label": opt.label, "value": opt.value} for opt in STAGE_OPTIONS]
    return [ALL_OPTION, *options] if include_all else options


def batch_dropdown_options(applicants: Sequence[Applicant]) -> List[dict]:
    return [ALL_OPTION, *({"label": b, "value": b} for b in batch_options(applicants))]


# ---------------------------------------------------------------------------
# Filter builder events
# ---------------------------------------------------------------------------

def apply_builder_event(root: FilterGroup, triggered: Mapping[str, Any], value: Any) -> FilterGroup:
    """
    Reduce one filter-builder UI event onto the tree.

    ``triggered`` is the pattern-matching id ``{"type": ..., "index": ...}``
    of the component that fired; ``value`` is its new property value
    (n_clicks for buttons). Returns ``root`` itself when nothing changed.
    """
    kind = triggered.get("type")
    target = str(triggered.get("index") or "")
    if not target:
        return root

    P = IDs.Pattern
    if kind in (P.FB_ADD_RULE, P.FB_ADD_GROUP, P.FB_REMOVE_GROUP, P.FB_REMOVE_RULE):
        # freshly rendered buttons report n_clicks=None
        if not value:
            return root
        if kind == P.FB_ADD_RULE:
            return add_condition(root, target)
        if kind == P.FB_ADD_GROUP:
            return add_subgroup(root, target)
        if kind == P.FB_REMOVE_GROUP:
            return remove_subgroup(root, target)
        return remove_condition(root, target)

    if kind == P.FB_LOGIC:
        logic = coerce_enum(FilterLogic, value)
        if not isinstance(logic, FilterLogic):
            return root
        return set_logic(root, target, logic)

    cond = root.find_condition(target)
    if cond is None:
        return root

    if kind == P.FB_FIELD:
        new_field = coerce_enum(FilterField, value)
        if new_field == cond.field:
            return root
        return update_condition(root, replace(cond, field=new_field))
    if kind == P.FB_OPERATOR:
        new_op = coerce_enum(FilterOperator, value)
        if new_op == cond.operator:
            return root
        return update_condition(root, replace(cond, operator=new_op))
    if kind == P.FB_VALUE:
        text = "" if value is None else str(value)
        if text == cond.value:
            return root
        return update_condition(root, replace(cond, value=text))

    logger.debug("Ignoring filter builder event %r", triggered)
    return root


def describe_tree(root: Optional[FilterGroup]) -> str:
    n = root.count_conditions() if root is not None else 0
    if n == 0:
        return "No advanced filters"
    return f"{n} advanced filter rule{'s' if n != 1 else ''} active"


# ---------------------------------------------------------------------------
# List state events
# ---------------------------------------------------------------------------

TriggerId = Union[str, Mapping[str, Any], None]


def apply_list_event(state: ListState, triggered: TriggerId, value: Any) -> ListState:
    """Reduce one toolbar/list UI event onto the list state."""
    C = IDs.Control
    if triggered == C.SEARCH_INPUT:
        return state.with_search(value)
    if triggered == C.BATCH_SELECT:
        return state.with_batch(value)
    if triggered == C.STAGE_SELECT:
        return state.with_stage(value)
    if triggered == C.PAGINATION:
        return state.with_page(value)
    if triggered == IDs.Store.FILTER_TREE:
        return state.reset_page()
    if isinstance(triggered, Mapping) and triggered.get("type") == IDs.Pattern.APPLICANT_ROW:
        if not value:
            return state
        return state.with_selected(str(triggered.get("index")))
    return state


def build_view(
    applicants: Sequence[Applicant],
    tree: Optional[FilterGroup],
    state: ListState,
    *,
    page_size: int,
    auto_select_first: bool = True,
) -> WaitlistView:
    """Filter tree first, then search/batch/stage, pagination and selection."""
    narrowed = apply_filter_tree(applicants, tree)
    return compute_waitlist_view(
        narrowed,
        state,
        page_size=page_size,
        auto_select_first=auto_select_first,
    )


def result_count_text(view: WaitlistView) -> str:
    meta = view.pagination
    if meta.total_items == 0:
        return "No applicants match the current filters"
    return f"Showing {meta.showing_from}-{meta.showing_to} of {meta.total_items} applicants"


# ---------------------------------------------------------------------------
# Reports + notices
# ---------------------------------------------------------------------------

def selected_export_fields(checklist_values: Optional[Sequence[Optional[Sequence[str]]]]) -> List[str]:
    """Merge the per-category checklists into one list in catalogue order."""
    chosen = {key for values in (checklist_values or []) for key in (values or [])}
    return [f.key for f in AVAILABLE_FIELDS if f.key in chosen]


def mutation_notice(result: Optional[MutationResult], fallback: str = "Request failed") -> Tuple[str, str, bool]:
    """(message, alert colour, is_open) for the notification banner."""
    if result is None:
        return "", "secondary", False
    if result.success:
        return result.message or "Done", "success", True
    return result.message or fallback, "danger", True
