from __future__ import annotations

from typing import Any

import httpx

from clients.hr_client_sdk.candidates_client import CandidatesClient
from clients.hr_client_sdk.employees_client import EmployeesClient
from clients.hr_client_sdk.http_client import HttpClient

from hr_console.app.config import AppConfig, load_config
from hr_console.app.infrastructure.sdk_adapter.recipients_adapter import (
    CandidateRecipientsSource,
    EmployeeRecipientsSource,
)
from hr_console.app.table_controller import TableController
from hr_console.app.ui.filters import FilterDescriptor, FilterOption
from hr_console.app.ui.listing_view import ColumnDescriptor
from hr_console.app.ui.panel_sync import TriggerCounters

ALL_VALUE = "all"


def _sent_badge(value: Any, row: dict[str, Any]) -> str:
    return "Sent" if row.get("emailSent") is True else "Not Sent"


def _or_dash(value: Any, row: dict[str, Any]) -> Any:
    return value if value not in (None, "") else "-"


EMPLOYEE_COLUMNS = [
    ColumnDescriptor(key="name", label="Name", order=0),
    ColumnDescriptor(key="email", label="Email", order=1),
    ColumnDescriptor(key="designation", label="Designation", order=2),
    ColumnDescriptor(key="role", label="Role", order=3, visible=False),
    ColumnDescriptor(key="phoneNumber", label="Phone", order=4, visible=False),
    ColumnDescriptor(key="emailStatus", label="Email Status", order=5, class_tag="status", render=_sent_badge),
    ColumnDescriptor(key="lastEmailDate", label="Last Email", order=6, render=_or_dash),
]

CANDIDATE_COLUMNS = [
    ColumnDescriptor(key="name", label="Name", order=0),
    ColumnDescriptor(key="email", label="Email", order=1),
    ColumnDescriptor(key="jobTitle", label="Job Title", order=2),
    ColumnDescriptor(key="status", label="Status", order=3),
    ColumnDescriptor(key="uploadedAt", label="Uploaded", order=4, visible=False),
    ColumnDescriptor(key="emailStatus", label="Email Status", order=5, class_tag="status", render=_sent_badge),
    ColumnDescriptor(key="lastEmailDate", label="Last Email", order=6, render=_or_dash),
]

EMAIL_SENT_FILTER = FilterDescriptor(
    key="emailSent",
    label="Email Status",
    options=(
        FilterOption(label="All", value=ALL_VALUE),
        FilterOption(label="Sent", value="sent"),
        FilterOption(label="Not Sent", value="not-sent"),
    ),
)

EMPLOYEE_FILTERS = [FilterDescriptor(key="designation", label="Designation")]
CANDIDATE_FILTERS = [FilterDescriptor(key="jobTitle", label="Job Title"), EMAIL_SENT_FILTER]


def build_http_client(
    config: AppConfig,
    *,
    access_token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HttpClient:
    return HttpClient(
        base_url=config.api_base_url,
        timeout_seconds=config.timeout_seconds,
        verify_ssl=config.verify_ssl,
        retry_max_attempts=config.retries + 1,
        retry_backoff_ms=config.retry_backoff_ms,
        transport=transport,
        access_token=access_token,
    )


class ConsoleBootstrap:
    """Wires config, the HTTP client and the recipient tables together."""

    def __init__(
        self,
        config: AppConfig | None = None,
        http_client: HttpClient | None = None,
        access_token: str | None = None,
    ) -> None:
        self.config = config or load_config()
        self.http = http_client or build_http_client(self.config, access_token=access_token)
        self.employees = EmployeesClient(self.http)
        self.candidates = CandidatesClient(self.http)

    def employee_table(
        self,
        tab: str = "employees",
        *,
        triggers: TriggerCounters | None = None,
        controlled_search: str | None = None,
    ) -> TableController:
        source = EmployeeRecipientsSource(self.employees, tab)
        return TableController(
            source,
            EMPLOYEE_COLUMNS,
            bulk_gateway=source,
            filters=EMPLOYEE_FILTERS,
            config=self.config,
            triggers=triggers,
            controlled_search=controlled_search,
            module=f"recipients.{tab}",
            resource="employees",
            empty_sentinel=ALL_VALUE,
        )

    def candidate_table(
        self,
        *,
        triggers: TriggerCounters | None = None,
        controlled_search: str | None = None,
    ) -> TableController:
        source = CandidateRecipientsSource(self.candidates)
        return TableController(
            source,
            CANDIDATE_COLUMNS,
            bulk_gateway=source,
            filters=CANDIDATE_FILTERS,
            config=self.config,
            triggers=triggers,
            controlled_search=controlled_search,
            module="recipients.candidates",
            resource="candidates",
            empty_sentinel=ALL_VALUE,
        )

    async def aclose(self) -> None:
        await self.http.aclose()
