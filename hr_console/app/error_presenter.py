from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from clients.hr_client_sdk.errors import PERMISSION_MARKERS, ApiError

PERMISSION_DENIED_MESSAGE = "You don't have permission to view this data."
BULK_FAILED_MESSAGE = "Failed to send emails. Please try again."
BULK_NOT_FOUND_MESSAGE = "Meeting not available"


class ErrorCategory(str, Enum):
    FETCH_FAILURE = "fetch_failure"
    PERMISSION_DENIED = "permission_denied"
    BULK_ACTION_FAILURE = "bulk_action_failure"


@dataclass(frozen=True)
class TableError:
    category: ErrorCategory
    message: str
    code: str | None = None
    trace_id: str | None = None
    status_code: int | None = None


def _is_permission_error(error: Exception) -> bool:
    if isinstance(error, ApiError):
        return error.is_permission_denied
    lowered = str(error).lower()
    return any(marker in lowered for marker in PERMISSION_MARKERS)


def describe_fetch_failure(error: Exception, resource: str = "records") -> TableError:
    code = error.code if isinstance(error, ApiError) else "INTERNAL_ERROR"
    trace_id = error.trace_id if isinstance(error, ApiError) else None
    status_code = error.status_code if isinstance(error, ApiError) else None
    if _is_permission_error(error):
        return TableError(
            category=ErrorCategory.PERMISSION_DENIED,
            message=PERMISSION_DENIED_MESSAGE,
            code=code,
            trace_id=trace_id,
            status_code=status_code,
        )
    return TableError(
        category=ErrorCategory.FETCH_FAILURE,
        message=f"Failed to fetch {resource}",
        code=code,
        trace_id=trace_id,
        status_code=status_code,
    )


def describe_bulk_failure(error: Exception) -> TableError:
    if isinstance(error, ApiError):
        if error.status_code == 404:
            message = error.server_message or BULK_NOT_FOUND_MESSAGE
        else:
            message = error.message or BULK_FAILED_MESSAGE
        return TableError(
            category=ErrorCategory.BULK_ACTION_FAILURE,
            message=message,
            code=error.code,
            trace_id=error.trace_id,
            status_code=error.status_code,
        )
    return TableError(
        category=ErrorCategory.BULK_ACTION_FAILURE,
        message=str(error) or BULK_FAILED_MESSAGE,
        code="INTERNAL_ERROR",
    )


def error_payload(error: TableError) -> dict[str, Any]:
    return {
        "category": error.category.value,
        "code": error.code,
        "message": error.message,
        "trace_id": error.trace_id,
        "status_code": error.status_code,
    }
