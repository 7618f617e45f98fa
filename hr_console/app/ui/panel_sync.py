from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

FILTERS_COUNTER = "open_filters"
SETTINGS_COUNTER = "open_settings"
RESET_COUNTER = "reset"


class PanelState(str, Enum):
    OPEN = "open"
    CLOSED = "closed"

    def flipped(self) -> "PanelState":
        return PanelState.CLOSED if self is PanelState.OPEN else PanelState.OPEN


@dataclass(frozen=True)
class TriggerCounters:
    open_filters: int = 0
    open_settings: int = 0
    reset: int = 0

    def as_dict(self) -> dict[str, int]:
        return {FILTERS_COUNTER: self.open_filters, SETTINGS_COUNTER: self.open_settings, RESET_COUNTER: self.reset}


@dataclass(frozen=True)
class SyncEvents:
    filters_toggled: bool = False
    settings_toggled: bool = False
    reset_requested: bool = False


class PanelSync:
    """Edge detector over parent-owned trigger counters.

    Each counter remembers the last value it was observed with, starting at
    the value passed in on mount. Only a change flips the matching panel;
    the absolute value carries no meaning.
    """

    def __init__(self, initial: TriggerCounters | None = None) -> None:
        self._last_seen = (initial or TriggerCounters()).as_dict()
        self.filters = PanelState.CLOSED
        self.settings = PanelState.CLOSED
        self.editing_column: str | None = None

    @property
    def filters_open(self) -> bool:
        return self.filters is PanelState.OPEN

    @property
    def settings_open(self) -> bool:
        return self.settings is PanelState.OPEN

    def last_seen(self, counter: str) -> int:
        return self._last_seen[counter]

    def observe(self, counters: TriggerCounters) -> SyncEvents:
        changed = {name for name, value in counters.as_dict().items() if self._last_seen[name] != value}
        self._last_seen = counters.as_dict()
        if FILTERS_COUNTER in changed:
            self.toggle_filters()
        if SETTINGS_COUNTER in changed:
            self.toggle_settings()
        return SyncEvents(
            filters_toggled=FILTERS_COUNTER in changed,
            settings_toggled=SETTINGS_COUNTER in changed,
            reset_requested=RESET_COUNTER in changed,
        )

    def toggle_filters(self) -> PanelState:
        self.filters = self.filters.flipped()
        return self.filters

    def toggle_settings(self) -> PanelState:
        self.settings = self.settings.flipped()
        if self.settings is PanelState.CLOSED:
            self.editing_column = None
        return self.settings

    def close_filters(self) -> None:
        self.filters = PanelState.CLOSED

    def close_settings(self) -> None:
        self.settings = PanelState.CLOSED
        self.editing_column = None

    def click_outside(self) -> None:
        self.close_filters()
        self.close_settings()

    def begin_rename(self, column_key: str) -> None:
        self.editing_column = column_key

    def finish_rename(self) -> None:
        self.editing_column = None
