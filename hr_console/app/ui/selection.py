from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Any


class SelectionTracker:
    """Selected row ids, kept as a subset of the currently loaded rows."""

    def __init__(self) -> None:
        self._selected: dict[Hashable, None] = {}

    @property
    def ids(self) -> list[Hashable]:
        return list(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._selected

    def is_selected(self, row_id: Hashable) -> bool:
        return row_id in self._selected

    def toggle(self, row_id: Hashable) -> bool:
        if row_id in self._selected:
            del self._selected[row_id]
            return False
        self._selected[row_id] = None
        return True

    def select_all(self, rows: Iterable[dict[str, Any]]) -> None:
        self._selected = {row["id"]: None for row in rows if row.get("id") is not None}

    def clear(self) -> None:
        self._selected = {}

    def all_selected(self, rows: list[dict[str, Any]]) -> bool:
        row_ids = {row.get("id") for row in rows}
        return bool(rows) and row_ids.issubset(self._selected.keys())

    def toggle_all(self, rows: list[dict[str, Any]]) -> None:
        if self.all_selected(rows):
            self.clear()
        else:
            self.select_all(rows)

    def discard(self, row_ids: Iterable[Hashable]) -> None:
        for row_id in row_ids:
            self._selected.pop(row_id, None)

    def reconcile_after_load(self, rows: Iterable[dict[str, Any]]) -> list[Hashable]:
        loaded = {row.get("id") for row in rows}
        dropped = [row_id for row_id in self._selected if row_id not in loaded]
        for row_id in dropped:
            del self._selected[row_id]
        return dropped
