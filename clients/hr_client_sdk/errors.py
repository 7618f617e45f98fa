from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

PERMISSION_MARKERS = ("don't have permission", "do not have permission", "permission denied", "forbidden")


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @property
    def is_permission_denied(self) -> bool:
        if self.status_code == 403 or self.code == "PERMISSION_DENIED":
            return True
        lowered = self.message.lower()
        return any(marker in lowered for marker in PERMISSION_MARKERS)

    @property
    def server_message(self) -> str | None:
        """Message the backend put in the error body, when it sent one."""
        if isinstance(self.details, dict):
            for key in ("message", "error"):
                value = self.details.get(key)
                if value:
                    return str(value)
        return self.message or None

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "ApiError":
        trace_id = response.headers.get("X-Trace-ID") or response.headers.get("X-Trace-Id")
        try:
            payload = response.json()
        except ValueError:
            return cls(
                code="HTTP_ERROR",
                message=response.text or "HTTP request failed",
                trace_id=trace_id,
                status_code=response.status_code,
            )

        if isinstance(payload, dict):
            message = payload.get("message") or payload.get("error") or response.text or "HTTP request failed"
            return cls(
                code=str(payload.get("code") or "HTTP_ERROR"),
                message=str(message),
                details=payload.get("details") if payload.get("details") is not None else payload,
                trace_id=payload.get("trace_id") or trace_id,
                status_code=response.status_code,
            )

        return cls(
            code="HTTP_ERROR",
            message=response.text or "HTTP request failed",
            details=payload,
            trace_id=trace_id,
            status_code=response.status_code,
        )
