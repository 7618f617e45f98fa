from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

EMPTY_VALUE = "—"
SORT_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class ColumnDescriptor:
    key: str
    label: str = ""
    visible: bool = True
    order: int = 0
    class_tag: str = ""
    render: Callable[[Any, dict[str, Any]], Any] | None = None


@dataclass(frozen=True)
class SortState:
    key: str | None = None
    direction: str = "asc"


@dataclass
class ViewState:
    """Search, filter, sort and column settings for one table instance.

    Only ``search_text``, ``active_filters`` and ``sort`` feed the data
    request; the column settings are display-only over loaded rows.
    """

    columns: list[ColumnDescriptor]
    search_text: str = ""
    active_filters: dict[str, Any] = field(default_factory=dict)
    sort: SortState = field(default_factory=SortState)
    column_visibility: dict[str, bool] = field(default_factory=dict)
    column_labels: dict[str, str] = field(default_factory=dict)
    column_order: list[str] = field(default_factory=list)
    empty_sentinel: str | None = None

    def __post_init__(self) -> None:
        keys = [column.key for column in self.columns]
        if len(set(keys)) != len(keys):
            raise ValueError("column keys must be unique per table")
        for column in self.columns:
            self.column_visibility.setdefault(column.key, column.visible)
            self.column_labels.setdefault(column.key, column.label or column.key)
        if not self.column_order:
            indexed = sorted(enumerate(self.columns), key=lambda item: (item[1].order, item[0]))
            self.column_order = [column.key for _, column in indexed]

    def set_search(self, text: str) -> None:
        self.search_text = text or ""

    def set_filter(self, key: str, value: Any) -> None:
        filters = dict(self.active_filters)
        if self._is_empty(value):
            filters.pop(key, None)
        else:
            filters[key] = value
        self.active_filters = filters

    def set_sort(self, key: str) -> None:
        if self.sort.key == key:
            flipped = "desc" if self.sort.direction == "asc" else "asc"
            self.sort = SortState(key=key, direction=flipped)
            return
        self.sort = SortState(key=key, direction="asc")

    def reset_all(self) -> None:
        self.search_text = ""
        self.active_filters = {}

    def toggle_column_visibility(self, key: str) -> bool:
        self._require_column(key)
        self.column_visibility[key] = not self.column_visibility.get(key, False)
        return self.column_visibility[key]

    def rename_column(self, key: str, new_label: str) -> None:
        self._require_column(key)
        label = (new_label or "").strip()
        self.column_labels[key] = label or self._descriptor(key).label or key

    def reorder_column(self, from_index: int, to_index: int) -> None:
        order = list(self.column_order)
        if not 0 <= from_index < len(order):
            return
        target = max(0, min(to_index, len(order) - 1))
        moved = order.pop(from_index)
        order.insert(target, moved)
        self.column_order = order

    def ordered_columns(self) -> list[ColumnDescriptor]:
        by_key = {column.key: column for column in self.columns}
        return [by_key[key] for key in self.column_order]

    def visible_columns(self) -> list[ColumnDescriptor]:
        return [column for column in self.ordered_columns() if self.column_visibility.get(column.key)]

    def header_labels(self) -> list[tuple[str, str]]:
        return [(column.key, self.column_labels[column.key]) for column in self.visible_columns()]

    def sort_indicator(self, key: str) -> str | None:
        if self.sort.key != key:
            return None
        return self.sort.direction

    def query_filters(self) -> dict[str, Any]:
        return clean_filters(self.active_filters, self.empty_sentinel)

    def render_row(self, row: dict[str, Any]) -> dict[str, Any]:
        rendered: dict[str, Any] = {}
        for column in self.visible_columns():
            value = row.get(column.key)
            rendered[column.key] = column.render(value, row) if column.render else value
        return rendered

    def _is_empty(self, value: Any) -> bool:
        if value is None or value == "":
            return True
        return self.empty_sentinel is not None and value == self.empty_sentinel

    def _descriptor(self, key: str) -> ColumnDescriptor:
        return next(column for column in self.columns if column.key == key)

    def _require_column(self, key: str) -> None:
        if key not in self.column_labels:
            raise KeyError(f"unknown column: {key}")


def clean_filters(filters: dict[str, Any], empty_sentinel: str | None = None) -> dict[str, Any]:
    return {
        key: value
        for key, value in filters.items()
        if value not in (None, "") and (empty_sentinel is None or value != empty_sentinel)
    }


def sort_rows(rows: list[dict[str, Any]], sort: SortState) -> list[dict[str, Any]]:
    if not sort.key:
        return list(rows)

    def _sort_key(row: dict[str, Any]) -> tuple[int, int, float, str]:
        raw = row.get(sort.key)
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return (0, 0, float(raw), "")
        value = normalize_value(raw)
        return (1 if value == EMPTY_VALUE else 0, 1, 0.0, value.lower())

    ordered = sorted(rows, key=_sort_key, reverse=sort.direction == "desc")
    if sort.direction == "desc":
        # keep blanks last in both directions
        filled = [row for row in ordered if normalize_value(row.get(sort.key)) != EMPTY_VALUE]
        blanks = [row for row in ordered if normalize_value(row.get(sort.key)) == EMPTY_VALUE]
        return filled + blanks
    return ordered


def normalize_value(value: Any) -> str:
    if value is None:
        return EMPTY_VALUE
    if isinstance(value, str):
        clean = value.strip()
        return clean or EMPTY_VALUE
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.astimezone().strftime("%Y-%m-%d %H:%M:%S %z")
    return str(value)
