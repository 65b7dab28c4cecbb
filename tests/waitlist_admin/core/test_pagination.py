from __future__ import annotations

from waitlist_admin.core.pagination import ELLIPSIS, build_page_items, get_pagination_meta


def test_meta_for_middle_page():
    meta = get_pagination_meta(23, 2, 10)
    assert meta.total_pages == 3
    assert meta.safe_page == 2
    assert (meta.start_index, meta.end_index_exclusive) == (10, 20)
    assert (meta.showing_from, meta.showing_to) == (11, 20)


def test_meta_clamps_requested_page():
    assert get_pagination_meta(23, 99, 10).safe_page == 3
    assert get_pagination_meta(23, 0, 10).safe_page == 1
    assert get_pagination_meta(23, -4, 10).safe_page == 1


def test_meta_for_empty_collection():
    meta = get_pagination_meta(0, 5, 10)
    assert meta.total_pages == 1
    assert meta.safe_page == 1
    assert (meta.start_index, meta.end_index_exclusive) == (0, 0)
    assert (meta.showing_from, meta.showing_to) == (0, 0)


def test_meta_guards_bad_sizes():
    meta = get_pagination_meta(-3, 1, 0)
    assert meta.total_items == 0
    assert meta.page_size == 1


def test_last_page_is_partial_and_slices():
    items = list(range(23))
    meta = get_pagination_meta(len(items), 3, 10)
    assert meta.slice(items) == [20, 21, 22]
    assert meta.showing_to == 23


def test_build_page_items_small_and_large():
    assert build_page_items(1, 5) == [1, 2, 3, 4, 5]
    assert build_page_items(1, 10) == [1, 2, ELLIPSIS, 10]
    assert build_page_items(5, 10) == [1, ELLIPSIS, 4, 5, 6, ELLIPSIS, 10]
    assert build_page_items(10, 10) == [1, ELLIPSIS, 9, 10]
    assert build_page_items(3, 10) == [1, 2, 3, 4, ELLIPSIS, 10]
