import pytest

from clients.hr_client_sdk.normalizers import FlatResult, PaginatedResult, normalize_fetch_result

from hr_console.app.ui.pagination import (
    PaginationMode,
    PaginationState,
    next_page,
    page_window,
    prev_page,
    recount,
    resolve_page,
    validate_page_size,
)


def _rows(count: int) -> list[dict]:
    return [{"id": index} for index in range(1, count + 1)]


def test_server_mode_when_metadata_reports_more_rows_than_returned() -> None:
    result = PaginatedResult(content=_rows(10), total_elements=47, total_pages=5)

    resolution = resolve_page(result, page=2, page_size=10)

    assert resolution.state.mode is PaginationMode.SERVER
    assert resolution.state.page == 2
    assert resolution.state.total_pages == 5
    assert resolution.state.total_items == 47
    assert resolution.visible_rows == result.content
    assert resolution.needs_refetch is False


def test_server_mode_page_past_the_end_is_clamped_and_needs_refetch() -> None:
    result = PaginatedResult(content=[], total_elements=47, total_pages=5)

    resolution = resolve_page(result, page=9, page_size=10)

    assert resolution.state.page == 4
    assert resolution.requested_page == 9
    assert resolution.needs_refetch is True


def test_client_mode_slices_the_full_list_locally() -> None:
    resolution = resolve_page(FlatResult(rows=_rows(23)), page=1, page_size=10)

    assert resolution.state.mode is PaginationMode.CLIENT
    assert resolution.state.total_pages == 3
    assert resolution.state.total_items == 23
    assert [row["id"] for row in resolution.visible_rows] == list(range(11, 21))
    assert len(resolution.rows) == 23
    assert resolution.needs_refetch is False


def test_client_mode_clamps_page_without_refetch() -> None:
    resolution = resolve_page(FlatResult(rows=_rows(23)), page=8, page_size=10)

    assert resolution.state.page == 2
    assert [row["id"] for row in resolution.visible_rows] == [21, 22, 23]
    assert resolution.needs_refetch is False


def test_inconsistent_metadata_with_every_row_returned_uses_client_mode() -> None:
    result = PaginatedResult(content=_rows(30), total_elements=30, total_pages=3)

    resolution = resolve_page(result, page=0, page_size=10)

    assert resolution.state.mode is PaginationMode.CLIENT
    assert len(resolution.visible_rows) == 10


def test_single_page_result_reports_one_page() -> None:
    resolution = resolve_page(FlatResult(rows=_rows(4)), page=0, page_size=10)

    assert resolution.state.mode is PaginationMode.SERVER
    assert resolution.state.total_pages == 1
    assert resolution.state.total_items == 4
    assert resolution.visible_rows == _rows(4)


def test_single_page_flat_result_on_later_page_does_not_refetch() -> None:
    resolution = resolve_page(FlatResult(rows=_rows(4)), page=3, page_size=10)

    assert resolution.state.page == 0
    assert resolution.needs_refetch is False


def test_single_page_paginated_result_on_later_page_refetches_first_page() -> None:
    result = PaginatedResult(content=[], total_elements=4, total_pages=1)

    resolution = resolve_page(result, page=3, page_size=10)

    assert resolution.state.page == 0
    assert resolution.needs_refetch is True


def test_page_navigation_is_bounded() -> None:
    state = PaginationState(mode=PaginationMode.SERVER, page=4, page_size=10, total_items=47, total_pages=5)

    assert next_page(state) == 4
    assert prev_page(PaginationState(page=0)) == 0
    assert prev_page(state) == 3


def test_recount_only_applies_to_client_mode() -> None:
    client = PaginationState(mode=PaginationMode.CLIENT, page=2, page_size=10, total_items=21, total_pages=3)
    server = PaginationState(mode=PaginationMode.SERVER, page=2, page_size=10, total_items=47, total_pages=5)

    recounted = recount(client, 19)

    assert recounted.total_pages == 2
    assert recounted.page == 1
    assert recount(server, 3) == server


def test_page_size_must_be_an_offered_option() -> None:
    assert validate_page_size(20) == 20
    with pytest.raises(ValueError):
        validate_page_size(7)


def test_page_window_shows_at_most_seven_buttons_around_current() -> None:
    assert page_window(0, 3) == [0, 1, 2]
    assert page_window(0, 20) == [0, 1, 2, 3, 4, 5, 6]
    assert page_window(10, 20) == [7, 8, 9, 10, 11, 12, 13]
    assert page_window(19, 20) == [13, 14, 15, 16, 17, 18, 19]
    assert page_window(0, 0) == []


def test_page_count_without_item_count_stays_server_paged() -> None:
    result = normalize_fetch_result({"content": _rows(10), "totalPages": 5})

    resolution = resolve_page(result, page=3, page_size=10)

    assert resolution.state.mode is PaginationMode.SERVER
    assert resolution.state.total_pages == 5
    assert resolution.state.page == 3
    assert resolution.state.total_items == 50
    assert resolution.needs_refetch is False


def test_server_reported_single_page_is_not_split() -> None:
    result = normalize_fetch_result({"content": _rows(4), "totalPages": 1})

    resolution = resolve_page(result, page=0, page_size=10)

    assert resolution.state.total_pages == 1
    assert resolution.state.total_items == 4
