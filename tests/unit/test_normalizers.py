from clients.hr_client_sdk.normalizers import FlatResult, PaginatedResult, normalize_fetch_result


def test_bare_list_is_a_flat_result() -> None:
    result = normalize_fetch_result([{"id": 1}, "junk", {"id": 2}])

    assert result == FlatResult(rows=[{"id": 1}, {"id": 2}])


def test_content_with_totals_is_paginated() -> None:
    payload = {"content": [{"id": 1}], "totalElements": 47, "totalPages": 5}

    result = normalize_fetch_result(payload)

    assert result == PaginatedResult(content=[{"id": 1}], total_elements=47, total_pages=5)


def test_totals_are_read_from_meta_and_snake_case_keys() -> None:
    payload = {"items": [{"id": "a"}], "meta": {"total_elements": "30", "total_pages": 3}}

    result = normalize_fetch_result(payload)

    assert isinstance(result, PaginatedResult)
    assert result.total_elements == 30
    assert result.total_pages == 3


def test_wrapped_list_without_metadata_stays_flat() -> None:
    result = normalize_fetch_result({"data": [{"id": "x"}]})

    assert result == FlatResult(rows=[{"id": "x"}])


def test_unusable_payloads_become_empty_flat_results() -> None:
    assert normalize_fetch_result(None) == FlatResult(rows=[])
    assert normalize_fetch_result("oops") == FlatResult(rows=[])
    assert normalize_fetch_result({"totalElements": True}) == FlatResult(rows=[])


def test_typed_results_pass_through() -> None:
    typed = PaginatedResult(content=[], total_elements=0, total_pages=0)

    assert normalize_fetch_result(typed) is typed


def test_missing_item_count_is_kept_distinct_from_zero() -> None:
    result = normalize_fetch_result({"content": [{"id": 1}], "totalPages": 5})

    assert isinstance(result, PaginatedResult)
    assert result.total_elements is None
    assert result.total_pages == 5
