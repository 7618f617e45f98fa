from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from clients.hr_client_sdk.normalizers import FetchResult, FlatResult, PaginatedResult

from hr_console.app.config import PAGE_SIZE_OPTIONS


class PaginationMode(str, Enum):
    SERVER = "server"
    CLIENT = "client"


@dataclass
class PaginationState:
    mode: PaginationMode = PaginationMode.SERVER
    page: int = 0
    page_size: int = 10
    total_items: int = 0
    total_pages: int = 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1

    @property
    def has_prev(self) -> bool:
        return self.page > 0


@dataclass(frozen=True)
class PageResolution:
    """Outcome of resolving one fetch result.

    ``rows`` is the full loaded collection (the whole list in client mode,
    the server page otherwise); ``visible_rows`` is what the table shows.
    ``requested_page`` differs from ``state.page`` when the server was asked
    for a page past the end and has to be asked again.
    """

    state: PaginationState
    rows: list[dict[str, Any]]
    visible_rows: list[dict[str, Any]]
    requested_page: int
    server_paged: bool = True

    @property
    def needs_refetch(self) -> bool:
        return self.server_paged and self.state.mode is PaginationMode.SERVER and self.requested_page != self.state.page


def resolve_page(result: FetchResult, page: int, page_size: int) -> PageResolution:
    safe_size = max(1, int(page_size))
    requested = max(0, int(page))

    if isinstance(result, FlatResult):
        rows = list(result.rows)
        total_pages, total_elements = 0, len(rows)
    else:
        rows = list(result.content)
        total_pages, total_elements = result.total_pages, result.total_elements

    # a server page count above one is trusted unless the rows already hold the whole list
    if total_pages > 1 and (total_elements is None or total_elements > len(rows)):
        state = PaginationState(
            mode=PaginationMode.SERVER,
            page=clamp_page(requested, total_pages),
            page_size=safe_size,
            # upper bound when the item count is missing
            total_items=total_elements if total_elements is not None else total_pages * safe_size,
            total_pages=total_pages,
        )
        return PageResolution(state=state, rows=rows, visible_rows=list(rows), requested_page=requested)

    # total_pages is not required to be 0 or 1 here: metadata that claims
    # several pages while the response already carries every row
    # (total_elements <= len(rows)) is paged locally as well.
    if len(rows) > safe_size and (total_elements is None or total_elements <= len(rows)):
        computed_pages = math.ceil(len(rows) / safe_size)
        state = PaginationState(
            mode=PaginationMode.CLIENT,
            page=clamp_page(requested, computed_pages),
            page_size=safe_size,
            total_items=len(rows),
            total_pages=computed_pages,
        )
        return PageResolution(state=state, rows=rows, visible_rows=slice_page(rows, state), requested_page=requested)

    state = PaginationState(
        mode=PaginationMode.SERVER,
        page=0,
        page_size=safe_size,
        total_items=max(total_elements or 0, len(rows)),
        total_pages=1,
    )
    return PageResolution(
        state=state,
        rows=rows,
        visible_rows=list(rows),
        requested_page=requested,
        server_paged=isinstance(result, PaginatedResult),
    )


def slice_page(rows: list[dict[str, Any]], state: PaginationState) -> list[dict[str, Any]]:
    if state.mode is PaginationMode.SERVER:
        return list(rows)
    start = state.page * state.page_size
    return list(rows[start : start + state.page_size])


def clamp_page(page: int, total_pages: int) -> int:
    if total_pages <= 0:
        return 0
    return max(0, min(page, total_pages - 1))


def recount(state: PaginationState, row_count: int) -> PaginationState:
    """Recompute client-side totals after the loaded collection changed size."""
    if state.mode is not PaginationMode.CLIENT:
        return state
    total_pages = max(1, math.ceil(row_count / state.page_size))
    return replace(state, total_items=row_count, total_pages=total_pages, page=clamp_page(state.page, total_pages))


def next_page(state: PaginationState) -> int:
    return clamp_page(state.page + 1, state.total_pages)


def prev_page(state: PaginationState) -> int:
    return max(0, state.page - 1)


def goto_page(state: PaginationState, page: int) -> int:
    return clamp_page(page, state.total_pages)


def validate_page_size(page_size: int) -> int:
    if page_size not in PAGE_SIZE_OPTIONS:
        raise ValueError(f"page size must be one of {PAGE_SIZE_OPTIONS}, got {page_size}")
    return page_size


def page_window(current: int, total_pages: int, max_buttons: int = 7) -> list[int]:
    if total_pages <= 0:
        return []
    start = max(0, current - max_buttons // 2)
    end = min(total_pages - 1, start + max_buttons - 1)
    if end - start + 1 < max_buttons:
        start = max(0, end - max_buttons + 1)
    return list(range(start, end + 1))
