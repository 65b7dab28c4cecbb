from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from .applicant import Applicant
from .pagination import PaginationMeta, get_pagination_meta
from .stages import normalize_stage


@dataclass(frozen=True)
class ListState:
    """
    Represents the current list/selection inputs of the review screen.

    Fields:

    - search_query: free text matched against name and email
    - batch_filter: exact batch label, "" for all batches
    - stage_filter: any stage spelling, "" for all stages
    - selected_id: applicant id the user last picked (may no longer be visible)
    - page: requested 1-based page, clamped when the view is computed

    Every transition returns a new ListState built only from the current value
    and the event, so applying a stale update followed by a fresh one always
    lands on the fresh state.
    """

    search_query: str = ""
    batch_filter: str = ""
    stage_filter: str = ""
    selected_id: Optional[str] = None
    page: int = 1

    def with_search(self, query: Optional[str]) -> ListState:
        return replace(self, search_query=query or "", page=1)

    def with_batch(self, batch: Optional[str]) -> ListState:
        return replace(self, batch_filter=batch or "", page=1)

    def with_stage(self, stage: Optional[str]) -> ListState:
        return replace(self, stage_filter=stage or "", page=1)

    def with_page(self, page: Optional[int]) -> ListState:
        return replace(self, page=int(page or 1))

    def with_selected(self, applicant_id: Optional[str]) -> ListState:
        return replace(self, selected_id=applicant_id)

    def reset_page(self) -> ListState:
        return self if self.page == 1 else replace(self, page=1)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> ListState:
        data = data or {}
        try:
            page = int(data.get("page") or 1)
        except (TypeError, ValueError):
            page = 1
        return cls(
            search_query=str(data.get("search_query") or ""),
            batch_filter=str(data.get("batch_filter") or ""),
            stage_filter=str(data.get("stage_filter") or ""),
            selected_id=data.get("selected_id") or None,
            page=page,
        )


def matches_search(applicant: Applicant, query: str) -> bool:
    q = query.strip().lower()
    if not q:
        return True
    return q in applicant.full_name.lower() or q in applicant.email.lower()


def filter_applicants(applicants: Sequence[Applicant], state: ListState) -> List[Applicant]:
    """Search + batch + stage, intersected; input order is preserved."""
    wanted_stage = normalize_stage(state.stage_filter) if state.stage_filter else ""
    out: List[Applicant] = []
    for applicant in applicants:
        if not matches_search(applicant, state.search_query):
            continue
        if state.batch_filter and applicant.batch.strip() != state.batch_filter.strip():
            continue
        if wanted_stage and normalize_stage(applicant.stage) != wanted_stage:
            continue
        out.append(applicant)
    return out


def resolve_selection(
    candidates: Sequence[Applicant],
    selected_id: Optional[str],
    auto_select_first: bool = True,
) -> Optional[Applicant]:
    if not candidates:
        return None
    if selected_id is not None:
        for applicant in candidates:
            if applicant.id == selected_id:
                return applicant
    return candidates[0] if auto_select_first else None


@dataclass(frozen=True)
class WaitlistView:
    """Everything the list + detail panes render for one ListState."""

    filtered: List[Applicant]
    page_items: List[Applicant]
    pagination: PaginationMeta
    selected: Optional[Applicant]
    state: ListState = field(default_factory=ListState)

    @property
    def filtered_ids(self) -> List[str]:
        return [a.id for a in self.filtered]


def compute_waitlist_view(
    applicants: Sequence[Applicant],
    state: ListState,
    *,
    page_size: int,
    auto_select_first: bool = True,
) -> WaitlistView:
    """
    Derive the visible page and the selected record.

    ``applicants`` is expected to be already narrowed by the filter tree.
    The returned ``state`` carries the clamped page and the resolved selection.
    """
    filtered = filter_applicants(applicants, state)
    meta = get_pagination_meta(len(filtered), state.page, page_size)
    page_items = meta.slice(filtered)

    selected = resolve_selection(filtered, state.selected_id, auto_select_first)

    # Keep the detail pane in step with what the list actually shows.
    if not page_items:
        selected = None
    elif auto_select_first and (
        selected is None or all(a.id != selected.id for a in page_items)
    ):
        selected = page_items[0]

    resolved = replace(
        state,
        page=meta.safe_page,
        selected_id=selected.id if selected is not None else None,
    )
    return WaitlistView(
        filtered=filtered,
        page_items=page_items,
        pagination=meta,
        selected=selected,
        state=resolved,
    )
