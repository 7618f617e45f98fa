from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

ROW_CONTAINER_KEYS = ("content", "rows", "items", "data")
TOTAL_ELEMENT_KEYS = ("totalElements", "total_elements", "total")
TOTAL_PAGE_KEYS = ("totalPages", "total_pages")


@dataclass(frozen=True)
class PaginatedResult:
    content: list[dict[str, Any]]
    # None when the server reported a page count but no item count
    total_elements: int | None = 0
    total_pages: int = 0


@dataclass(frozen=True)
class FlatResult:
    rows: list[dict[str, Any]] = field(default_factory=list)


FetchResult = Union[PaginatedResult, FlatResult]


def normalize_fetch_result(payload: Any) -> FetchResult:
    """Classify a listing payload once, at the data source boundary.

    A bare list is the unpaginated shape. A mapping is treated as
    paginated only when it carries page metadata; a mapping that merely
    wraps a list (``{"data": [...]}``) is still a flat result.
    """
    if isinstance(payload, (PaginatedResult, FlatResult)):
        return payload
    if isinstance(payload, list):
        return FlatResult(rows=_only_mappings(payload))
    if not isinstance(payload, dict):
        return FlatResult(rows=[])

    rows: list[dict[str, Any]] = []
    for key in ROW_CONTAINER_KEYS:
        candidate = payload.get(key)
        if isinstance(candidate, list):
            rows = _only_mappings(candidate)
            break

    meta = payload.get("meta") if isinstance(payload.get("meta"), dict) else {}
    total_elements = _first_int(payload, TOTAL_ELEMENT_KEYS)
    if total_elements is None:
        total_elements = _first_int(meta, TOTAL_ELEMENT_KEYS)
    total_pages = _first_int(payload, TOTAL_PAGE_KEYS)
    if total_pages is None:
        total_pages = _first_int(meta, TOTAL_PAGE_KEYS)

    if total_elements is None and total_pages is None:
        return FlatResult(rows=rows)
    return PaginatedResult(
        content=rows,
        total_elements=max(0, total_elements) if total_elements is not None else None,
        total_pages=max(0, total_pages or 0),
    )


def _only_mappings(items: list[Any]) -> list[dict[str, Any]]:
    return [dict(item) for item in items if isinstance(item, dict)]


def _first_int(source: dict[str, Any], keys: tuple[str, ...]) -> int | None:
    for key in keys:
        value = _to_int(source.get(key))
        if value is not None:
            return value
    return None


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        if value is None or value == "":
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
