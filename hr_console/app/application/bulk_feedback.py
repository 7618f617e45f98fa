from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from clients.hr_client_sdk.models import FailureRecord

DEFAULT_FAILURE_REPORT_CAP = 10


@dataclass(frozen=True)
class ReportedFailure:
    id: str
    reason: str

    @property
    def text(self) -> str:
        return f"Failed to send to ID {self.id}: {self.reason}"


@dataclass
class BulkActionOutcome:
    updated_count: int = 0
    failed_count: int = 0
    summary: str = ""
    failures: list[FailureRecord] = field(default_factory=list)
    reported: list[ReportedFailure] = field(default_factory=list)
    skipped: int = 0
    refetched: bool = False
    batch_failed: bool = False
    error: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.batch_failed and self.failed_count == 0


def summarize(updated_count: int, failed_count: int, noun: str = "email") -> str:
    if failed_count > 0:
        return f"Sent {updated_count}, Failed {failed_count}"
    if updated_count > 0:
        plural = "s" if updated_count > 1 else ""
        return f"Successfully sent {updated_count} {noun}{plural}!"
    return f"No {noun}s were sent."


def report_failures(failures: list[FailureRecord], cap: int = DEFAULT_FAILURE_REPORT_CAP) -> list[ReportedFailure]:
    return [ReportedFailure(id=failure.display_id, reason=failure.reason) for failure in failures[: max(0, cap)]]
