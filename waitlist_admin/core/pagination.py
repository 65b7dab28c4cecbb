from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, TypeVar, Union

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
ELLIPSIS = "ellipsis"

PageItem = Union[int, str]


@dataclass(frozen=True)
class PaginationMeta:
    """
    Page window for a collection of ``total_items``.

    - safe_page: requested page clamped into [1, total_pages]
    - start_index / end_index_exclusive: slice bounds for the safe page
    - showing_from / showing_to: 1-based range for "Showing x-y of n" (0-0 when empty)
    """

    total_items: int
    page_size: int
    total_pages: int
    safe_page: int
    start_index: int
    end_index_exclusive: int
    showing_from: int
    showing_to: int

    def slice(self, items: Sequence[T]) -> List[T]:
        return list(items[self.start_index:self.end_index_exclusive])


def get_pagination_meta(total_items: int, page: int, page_size: int = DEFAULT_PAGE_SIZE) -> PaginationMeta:
    safe_total = max(0, int(total_items))
    safe_size = max(1, int(page_size))

    total_pages = max(1, math.ceil(safe_total / safe_size))
    safe_page = min(max(1, int(page)), total_pages)

    start = (safe_page - 1) * safe_size
    end = min(start + safe_size, safe_total)

    return PaginationMeta(
        total_items=safe_total,
        page_size=safe_size,
        total_pages=total_pages,
        safe_page=safe_page,
        start_index=start,
        end_index_exclusive=end,
        showing_from=0 if safe_total == 0 else start + 1,
        showing_to=end,
    )


def build_page_items(current_page: int, total_pages: int) -> List[PageItem]:
    """
    Page buttons: every page up to 7, otherwise first/last plus a window around current.

    The Dash list uses ``dbc.Pagination``, which draws its own ellipses; this is
    for callers that render page links themselves.
    """
    if total_pages <= 7:
        return list(range(1, total_pages + 1))

    items: List[PageItem] = [1]
    left = max(2, current_page - 1)
    right = min(total_pages - 1, current_page + 1)

    if left > 2:
        items.append(ELLIPSIS)
    items.extend(range(left, right + 1))
    if right < total_pages - 1:
        items.append(ELLIPSIS)

    items.append(total_pages)
    return items
