from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional, Tuple

from .filter_tree import (
    FilterCondition,
    FilterGroup,
    FilterLogic,
    new_condition,
    new_group,
)

logger = logging.getLogger(__name__)

GroupEdit = Callable[[FilterGroup], FilterGroup]


# ---------------------------------------------------------------------------
# Path rebuilding
# ---------------------------------------------------------------------------

def _edit_group(group: FilterGroup, group_id: str, edit: GroupEdit) -> FilterGroup:
    """
    Apply ``edit`` to the group with ``group_id`` and rebuild its ancestors.

    Untouched subtrees are returned as-is, so a missing id yields the very
    same root object.
    """
    if group.id == group_id:
        return edit(group)

    children = tuple(_edit_group(child, group_id, edit) for child in group.groups)
    if all(new is old for new, old in zip(children, group.groups)):
        return group
    return replace(group, groups=children)


def _edit_conditions(
    group: FilterGroup,
    edit: Callable[[Tuple[FilterCondition, ...]], Tuple[FilterCondition, ...]],
) -> FilterGroup:
    conditions = edit(group.conditions)
    children = tuple(_edit_conditions(child, edit) for child in group.groups)

    children_same = all(new is old for new, old in zip(children, group.groups))
    if conditions is group.conditions and children_same:
        return group
    return replace(group, conditions=conditions, groups=group.groups if children_same else children)


# ---------------------------------------------------------------------------
# Tree edits (all pure: the input tree is never modified)
# ---------------------------------------------------------------------------

def add_condition(
    root: FilterGroup,
    group_id: str,
    condition: Optional[FilterCondition] = None,
) -> FilterGroup:
    """Append a rule (default field/operator, empty value) to a group."""
    cond = condition or new_condition()
    return _edit_group(root, group_id, lambda g: replace(g, conditions=g.conditions + (cond,)))


def update_condition(root: FilterGroup, updated: FilterCondition) -> FilterGroup:
    """Replace the rule carrying ``updated.id`` wherever it lives in the tree."""

    def swap(conditions: Tuple[FilterCondition, ...]) -> Tuple[FilterCondition, ...]:
        if not any(c.id == updated.id for c in conditions):
            return conditions
        return tuple(updated if c.id == updated.id else c for c in conditions)

    return _edit_conditions(root, swap)


def remove_condition(root: FilterGroup, condition_id: str) -> FilterGroup:

    def drop(conditions: Tuple[FilterCondition, ...]) -> Tuple[FilterCondition, ...]:
        if not any(c.id == condition_id for c in conditions):
            return conditions
        return tuple(c for c in conditions if c.id != condition_id)

    return _edit_conditions(root, drop)


def add_subgroup(
    root: FilterGroup,
    parent_id: str,
    group: Optional[FilterGroup] = None,
) -> FilterGroup:
    """Append an empty AND group under ``parent_id``; depth is unbounded."""
    child = group or new_group()
    return _edit_group(root, parent_id, lambda g: replace(g, groups=g.groups + (child,)))


def remove_subgroup(root: FilterGroup, group_id: str) -> FilterGroup:
    """Drop a non-root group. Asking to remove the root itself is a no-op."""
    if root.id == group_id:
        return root

    def drop_child(group: FilterGroup) -> FilterGroup:
        if not any(child.id == group_id for child in group.groups):
            children = tuple(drop_child(child) for child in group.groups)
            if all(new is old for new, old in zip(children, group.groups)):
                return group
            return replace(group, groups=children)
        return replace(group, groups=tuple(c for c in group.groups if c.id != group_id))

    return drop_child(root)


def set_logic(root: FilterGroup, group_id: str, logic: FilterLogic) -> FilterGroup:
    target = root.find_group(group_id)
    if target is None or target.logic == logic:
        return root
    return _edit_group(root, group_id, lambda g: replace(g, logic=logic))


def toggle_logic(root: FilterGroup, group_id: str) -> FilterGroup:
    """Flip AND <-> OR on one group."""

    def flip(group: FilterGroup) -> FilterGroup:
        logic = FilterLogic.OR if group.logic == FilterLogic.AND else FilterLogic.AND
        return replace(group, logic=logic)

    return _edit_group(root, group_id, flip)


# ---------------------------------------------------------------------------
# Stateful wrapper
# ---------------------------------------------------------------------------

class FilterBuilder:
    """
    Holds the current root of one editing session and reports every edit.

    The builder keeps no history and persists nothing; ``on_change`` receives
    the new root after each mutation that actually changed the tree.

    The Dash app does not use this class: its filter-tree store holds the
    root, and the edit callback calls the module-level functions above.
    """

    def __init__(
        self,
        initial: Optional[FilterGroup] = None,
        on_change: Optional[Callable[[FilterGroup], None]] = None,
    ) -> None:
        self._root = initial or new_group()
        self._on_change = on_change

    @property
    def root(self) -> FilterGroup:
        return self._root

    def _commit(self, new_root: FilterGroup) -> FilterGroup:
        if new_root is not self._root:
            self._root = new_root
            if self._on_change is not None:
                self._on_change(new_root)
        else:
            logger.debug("Filter edit was a no-op on root %s", self._root.id)
        return self._root

    def add_condition(self, group_id: str) -> FilterGroup:
        return self._commit(add_condition(self._root, group_id))

    def update_condition(self, updated: FilterCondition) -> FilterGroup:
        return self._commit(update_condition(self._root, updated))

    def remove_condition(self, condition_id: str) -> FilterGroup:
        return self._commit(remove_condition(self._root, condition_id))

    def add_subgroup(self, parent_id: str) -> FilterGroup:
        return self._commit(add_subgroup(self._root, parent_id))

    def remove_subgroup(self, group_id: str) -> FilterGroup:
        return self._commit(remove_subgroup(self._root, group_id))

    def toggle_logic(self, group_id: str) -> FilterGroup:
        return self._commit(toggle_logic(self._root, group_id))

    def set_logic(self, group_id: str, logic: FilterLogic) -> FilterGroup:
        return self._commit(set_logic(self._root, group_id, logic))
