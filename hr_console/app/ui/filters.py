from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FilterOption:
    label: str
    value: Any


@dataclass(frozen=True)
class FilterDescriptor:
    key: str
    label: str = ""
    options: tuple[FilterOption, ...] | None = None

    @property
    def display_label(self) -> str:
        return self.label or self.key


def filter_options(descriptor: FilterDescriptor, rows: list[dict[str, Any]]) -> list[FilterOption]:
    """Declared options win; otherwise offer the distinct values seen in the loaded rows."""
    if descriptor.options is not None:
        return list(descriptor.options)
    seen: list[Any] = []
    for row in rows:
        value = row.get(descriptor.key)
        if not value or isinstance(value, (dict, list)) or value in seen:
            continue
        seen.append(value)
    return [FilterOption(label=str(value), value=value) for value in seen]
