from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

from clients.hr_client_sdk.models import BulkActionResponse
from clients.hr_client_sdk.normalizers import FetchResult, normalize_fetch_result

from hr_console.app.application.bulk_feedback import BulkActionOutcome, report_failures, summarize
from hr_console.app.application.row_reconciler import reconcile_rows
from hr_console.app.config import AppConfig
from hr_console.app.error_presenter import TableError, describe_bulk_failure, describe_fetch_failure
from hr_console.app.infrastructure.logging.logger import get_logger, log_event
from hr_console.app.ui.filters import FilterDescriptor, FilterOption, filter_options
from hr_console.app.ui.listing_view import ColumnDescriptor, ViewState, sort_rows
from hr_console.app.ui.pagination import (
    PaginationMode,
    PaginationState,
    clamp_page,
    goto_page,
    next_page,
    page_window,
    prev_page,
    recount,
    resolve_page,
    slice_page,
    validate_page_size,
)
from hr_console.app.ui.panel_sync import PanelSync, SyncEvents, TriggerCounters
from hr_console.app.ui.selection import SelectionTracker


@dataclass(frozen=True)
class TableQuery:
    search: str = ""
    filters: dict[str, Any] = field(default_factory=dict)
    sort_key: str | None = None
    sort_direction: str = "asc"
    page: int = 0
    page_size: int = 10

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"page": self.page, "size": self.page_size}
        if self.sort_key:
            params["sortBy"] = self.sort_key
            params["direction"] = self.sort_direction
        if self.search:
            params["search"] = self.search
        # filter keys are forwarded as-is, the backend owns their meaning
        params.update(self.filters)
        return params


class DataSource(Protocol):
    async def fetch(self, query: TableQuery) -> FetchResult | Mapping[str, Any] | list[Any]: ...


class BulkActionGateway(Protocol):
    async def execute(
        self, ids: list[Hashable], action_payload: dict[str, Any]
    ) -> BulkActionResponse | Mapping[str, Any]: ...


@dataclass(frozen=True)
class TableSnapshot:
    rows: list[dict[str, Any]]
    cells: list[dict[str, Any]]
    headers: list[tuple[str, str]]
    search_text: str
    active_filters: dict[str, Any]
    sort_key: str | None
    sort_direction: str
    selected_ids: list[Hashable]
    all_selected: bool
    pagination: PaginationState
    page_buttons: list[int]
    loading: bool
    error: TableError | None
    filters_open: bool
    settings_open: bool
    editing_column: str | None
    filter_options: dict[str, list[FilterOption]]


class TableController:
    """Drives one generic table: view state in, fetched and reconciled rows out.

    Every change to search, filters, sort or server-side pagination issues
    exactly one request. Completions are tagged with a sequence token and
    only the latest one is applied, so a slow early response can never
    overwrite the result of a later request.
    """

    def __init__(
        self,
        data_source: DataSource,
        columns: list[ColumnDescriptor],
        *,
        bulk_gateway: BulkActionGateway | None = None,
        filters: list[FilterDescriptor] | None = None,
        config: AppConfig | None = None,
        triggers: TriggerCounters | None = None,
        controlled_search: str | None = None,
        module: str = "table",
        resource: str = "records",
        noun: str = "email",
        empty_sentinel: str | None = None,
        logger: logging.Logger | None = None,
        now: Callable[[], str] | None = None,
    ) -> None:
        self.config = config or AppConfig.defaults()
        self.data_source = data_source
        self.bulk_gateway = bulk_gateway
        self.filters = list(filters or [])
        self.module = module
        self.resource = resource
        self.noun = noun
        self.logger = logger or get_logger(f"hr_console.{module}")
        self._now = now

        self.view = ViewState(columns=list(columns), empty_sentinel=empty_sentinel)
        if controlled_search:
            self.view.set_search(controlled_search)
        self._last_controlled_search = controlled_search
        self.selection = SelectionTracker()
        self.panels = PanelSync(triggers)
        self.pagination = PaginationState(page_size=self.config.page_size)

        self.loading = False
        self.bulk_in_flight = False
        self.error: TableError | None = None
        self.last_outcome: BulkActionOutcome | None = None
        self._rows: list[dict[str, Any]] = []
        self._visible: list[dict[str, Any]] = []
        self._request_seq = 0

    @property
    def rows(self) -> list[dict[str, Any]]:
        return list(self._rows)

    @property
    def visible_rows(self) -> list[dict[str, Any]]:
        return list(self._visible)

    def current_query(self) -> TableQuery:
        return TableQuery(
            search=self.view.search_text,
            filters=self.view.query_filters(),
            sort_key=self.view.sort.key,
            sort_direction=self.view.sort.direction,
            page=self.pagination.page,
            page_size=self.pagination.page_size,
        )

    async def refresh(self) -> bool:
        """Fetch with the current query; returns False when the result was not applied."""
        return await self._fetch(allow_reclamp=True)

    async def _fetch(self, allow_reclamp: bool) -> bool:
        self._request_seq += 1
        token = self._request_seq
        query = self.current_query()
        self.loading = True
        log_event(self.logger, self.module, "fetch", "issued", seq=token, page=query.page, size=query.page_size)
        try:
            raw = await self.data_source.fetch(query)
            result = normalize_fetch_result(raw)
        except Exception as error:  # noqa: BLE001
            self._settle(token)
            if token != self._request_seq:
                log_event(self.logger, self.module, "fetch", "discarded", seq=token, latest=self._request_seq)
                return False
            self._rows = []
            self._visible = []
            self.selection.reconcile_after_load([])
            self.error = describe_fetch_failure(error, self.resource)
            log_event(
                self.logger,
                self.module,
                "fetch",
                "failed",
                level=logging.ERROR,
                seq=token,
                category=self.error.category.value,
                code=self.error.code,
                trace_id=self.error.trace_id,
            )
            return False

        self._settle(token)
        if token != self._request_seq:
            log_event(self.logger, self.module, "fetch", "discarded", seq=token, latest=self._request_seq)
            return False

        resolution = resolve_page(result, query.page, query.page_size)
        if allow_reclamp and resolution.needs_refetch:
            log_event(
                self.logger,
                self.module,
                "fetch",
                "reclamp",
                seq=token,
                requested_page=resolution.requested_page,
                page=resolution.state.page,
            )
            self.pagination = replace(self.pagination, page=resolution.state.page)
            return await self._fetch(allow_reclamp=False)

        self.error = None
        if resolution.state.mode is PaginationMode.CLIENT:
            # local page changes made while this request was in flight win
            page = clamp_page(self.pagination.page, resolution.state.total_pages)
            self.pagination = replace(resolution.state, page=page)
            self._rows = sort_rows(resolution.rows, self.view.sort)
            self._visible = slice_page(self._rows, self.pagination)
        else:
            self.pagination = resolution.state
            self._rows = list(resolution.rows)
            self._visible = list(resolution.visible_rows)
        dropped = self.selection.reconcile_after_load(self._rows)
        log_event(
            self.logger,
            self.module,
            "fetch",
            "applied",
            seq=token,
            mode=self.pagination.mode.value,
            page=self.pagination.page,
            rows=len(self._visible),
            total=self.pagination.total_items,
            deselected=len(dropped),
        )
        return True

    def _settle(self, token: int) -> None:
        if token == self._request_seq:
            self.loading = False

    async def set_search(self, text: str) -> bool:
        self.view.set_search(text)
        return await self.refresh()

    async def set_filter(self, key: str, value: Any) -> bool:
        self.view.set_filter(key, value)
        return await self.refresh()

    async def set_sort(self, key: str) -> bool:
        self.view.set_sort(key)
        return await self.refresh()

    async def reset_all(self) -> bool:
        self.view.reset_all()
        return await self.refresh()

    async def set_page(self, page: int) -> bool:
        if self.pagination.mode is PaginationMode.CLIENT:
            self.pagination = replace(self.pagination, page=goto_page(self.pagination, page))
            self._visible = slice_page(self._rows, self.pagination)
            return True
        self.pagination = replace(self.pagination, page=max(0, int(page)))
        return await self.refresh()

    async def next_page(self) -> bool:
        return await self.set_page(next_page(self.pagination))

    async def prev_page(self) -> bool:
        return await self.set_page(prev_page(self.pagination))

    async def set_page_size(self, page_size: int) -> bool:
        size = validate_page_size(page_size)
        self.pagination = replace(self.pagination, page_size=size, page=0)
        return await self.refresh()

    def toggle_column_visibility(self, key: str) -> bool:
        return self.view.toggle_column_visibility(key)

    def rename_column(self, key: str, new_label: str) -> None:
        self.view.rename_column(key, new_label)
        self.panels.finish_rename()

    def reorder_column(self, from_index: int, to_index: int) -> None:
        self.view.reorder_column(from_index, to_index)

    def toggle_row(self, row_id: Hashable) -> bool:
        return self.selection.toggle(row_id)

    def select_all(self) -> None:
        self.selection.select_all(self._visible)

    def clear_selection(self) -> None:
        self.selection.clear()

    def toggle_all(self) -> None:
        self.selection.toggle_all(self._visible)

    def toggle_filters_panel(self) -> bool:
        self.panels.toggle_filters()
        return self.panels.filters_open

    def toggle_settings_panel(self) -> bool:
        self.panels.toggle_settings()
        return self.panels.settings_open

    def click_outside(self) -> None:
        self.panels.click_outside()

    def begin_rename(self, key: str) -> None:
        self.panels.begin_rename(key)

    async def sync_inputs(
        self,
        triggers: TriggerCounters | None = None,
        controlled_search: str | None = None,
    ) -> SyncEvents:
        """Apply parent-owned inputs; at most one request results from a call."""
        events = SyncEvents()
        needs_fetch = False
        if triggers is not None:
            events = self.panels.observe(triggers)
            if events.reset_requested:
                self.view.reset_all()
                needs_fetch = True
        if controlled_search is not None and controlled_search != self._last_controlled_search:
            self._last_controlled_search = controlled_search
            if controlled_search != self.view.search_text:
                self.view.set_search(controlled_search)
                needs_fetch = True
        if needs_fetch:
            await self.refresh()
        return events

    async def run_bulk_action(
        self,
        action_payload: Mapping[str, Any],
        *,
        ids: list[Hashable] | None = None,
        upsert: bool = False,
    ) -> BulkActionOutcome:
        if self.bulk_gateway is None:
            raise RuntimeError("table has no bulk action gateway")
        target_ids = list(ids) if ids is not None else self.selection.ids
        if not target_ids:
            raise ValueError("bulk action needs at least one selected row")

        self.bulk_in_flight = True
        try:
            raw = await self.bulk_gateway.execute(target_ids, dict(action_payload))
            response = BulkActionResponse.parse(raw)
        except Exception as error:  # noqa: BLE001
            failure = describe_bulk_failure(error)
            outcome = BulkActionOutcome(summary=failure.message, error=failure)
            log_event(
                self.logger,
                self.module,
                "bulk",
                "failed",
                level=logging.ERROR,
                requested=len(target_ids),
                code=failure.code,
                status_code=failure.status_code,
                trace_id=failure.trace_id,
            )
            self.last_outcome = outcome
            return outcome
        finally:
            self.bulk_in_flight = False

        failures = list(response.failed)
        reported = report_failures(failures, self.config.failure_report_cap)

        if response.batch_failed:
            outcome = BulkActionOutcome(
                failed_count=len(failures),
                summary=response.message or summarize(0, max(1, len(failures)), self.noun),
                failures=failures,
                reported=reported,
                batch_failed=True,
            )
        elif response.updated is None:
            refetched = await self.refresh()
            outcome = BulkActionOutcome(
                failed_count=len(failures),
                summary=response.message or f"Reloaded {self.resource} to confirm the result.",
                failures=failures,
                reported=reported,
                refetched=refetched,
            )
        else:
            reconciled = reconcile_rows(self._rows, response.updated, upsert=upsert, now=self._now)
            self._rows = reconciled.rows
            self.pagination = recount(self.pagination, len(self._rows))
            self._visible = slice_page(self._rows, self.pagination)
            self.selection.discard(reconciled.matched_ids)
            if reconciled.skipped:
                log_event(
                    self.logger,
                    self.module,
                    "reconcile",
                    "skipped",
                    level=logging.WARNING,
                    skipped=reconciled.skipped,
                )
            outcome = BulkActionOutcome(
                updated_count=len(response.updated),
                failed_count=len(failures),
                summary=summarize(len(response.updated), len(failures), self.noun),
                failures=failures,
                reported=reported,
                skipped=reconciled.skipped,
            )

        log_event(
            self.logger,
            self.module,
            "bulk",
            "completed",
            requested=len(target_ids),
            updated=outcome.updated_count,
            failed=outcome.failed_count,
            batch_failed=outcome.batch_failed,
            refetched=outcome.refetched,
        )
        self.last_outcome = outcome
        return outcome

    def filter_options(self) -> dict[str, list[FilterOption]]:
        return {descriptor.key: filter_options(descriptor, self._rows) for descriptor in self.filters}

    def snapshot(self) -> TableSnapshot:
        return TableSnapshot(
            rows=list(self._visible),
            cells=[self.view.render_row(row) for row in self._visible],
            headers=self.view.header_labels(),
            search_text=self.view.search_text,
            active_filters=dict(self.view.active_filters),
            sort_key=self.view.sort.key,
            sort_direction=self.view.sort.direction,
            selected_ids=self.selection.ids,
            all_selected=self.selection.all_selected(self._visible),
            pagination=replace(self.pagination),
            page_buttons=page_window(self.pagination.page, self.pagination.total_pages, self.config.page_window),
            loading=self.loading,
            error=self.error,
            filters_open=self.panels.filters_open,
            settings_open=self.panels.settings_open,
            editing_column=self.panels.editing_column,
            filter_options=self.filter_options(),
        )
