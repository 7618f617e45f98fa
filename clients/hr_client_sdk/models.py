from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

FAILURE_ID_FIELDS = ("id", "userId", "employeeId", "candidateId")
FAILURE_REASON_FIELDS = ("error", "message")


class FailureRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: Any = None
    error: str | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> "FailureRecord":
        if not isinstance(raw, dict):
            return cls(id=None, error=str(raw) if raw is not None else None)
        resolved_id = next((raw[key] for key in FAILURE_ID_FIELDS if raw.get(key) not in (None, "")), None)
        reason = next((str(raw[key]) for key in FAILURE_REASON_FIELDS if raw.get(key) not in (None, "")), None)
        extras = {key: value for key, value in raw.items() if key not in {"id", "error"}}
        return cls(id=resolved_id, error=reason, **extras)

    @property
    def display_id(self) -> str:
        return "unknown" if self.id in (None, "") else str(self.id)

    @property
    def reason(self) -> str:
        return self.error or "Unknown error"


class BulkActionResponse(BaseModel):
    """Bulk action reply; ``updated is None`` means the outcome is unknown."""

    model_config = ConfigDict(extra="allow")

    status: str | None = None
    message: str | None = None
    updated: list[dict[str, Any]] | None = None
    failed: list[FailureRecord] = Field(default_factory=list)

    @field_validator("updated", mode="before")
    @classmethod
    def _keep_mappings(cls, value: Any) -> list[dict[str, Any]] | None:
        if not isinstance(value, list):
            return None
        return [item for item in value if isinstance(item, dict)]

    @field_validator("failed", mode="before")
    @classmethod
    def _coerce_failures(cls, value: Any) -> list[FailureRecord]:
        if not isinstance(value, list):
            return []
        return [item if isinstance(item, FailureRecord) else FailureRecord.from_raw(item) for item in value]

    @property
    def batch_failed(self) -> bool:
        return (self.status or "").lower() == "failed"

    @classmethod
    def parse(cls, payload: Any) -> "BulkActionResponse":
        if isinstance(payload, BulkActionResponse):
            return payload
        if not isinstance(payload, dict):
            return cls()
        return cls.model_validate(payload)
