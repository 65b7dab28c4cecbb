"""
Core domain layer: applicant record, recursive filter tree (model, evaluator,
builder), stage normalisation, pagination and the list/selection state
"""

from .applicant import Applicant
from .filter_builder import FilterBuilder
from .filter_eval import apply_filter_tree, matches_condition, matches_group
from .filter_tree import FilterCondition, FilterField, FilterGroup, FilterLogic, FilterOperator
from .list_state import ListState, WaitlistView, compute_waitlist_view
from .pagination import PaginationMeta, get_pagination_meta

__all__ = [
    "Applicant",
    "FilterBuilder",
    "FilterCondition",
    "FilterField",
    "FilterGroup",
    "FilterLogic",
    "FilterOperator",
    "ListState",
    "PaginationMeta",
    "WaitlistView",
    "apply_filter_tree",
    "compute_waitlist_view",
    "get_pagination_meta",
    "matches_condition",
    "matches_group",
]
