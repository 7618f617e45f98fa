from __future__ import annotations

from dataclasses import replace
from typing import Any

from clients.hr_client_sdk.candidates_client import CandidatesClient
from clients.hr_client_sdk.employees_client import EmployeesClient
from clients.hr_client_sdk.models import BulkActionResponse
from clients.hr_client_sdk.normalizers import FetchResult, FlatResult, PaginatedResult

from hr_console.app.recipients import to_recipient_row
from hr_console.app.table_controller import TableQuery


def _map_rows(result: FetchResult, tab: str) -> FetchResult:
    if isinstance(result, PaginatedResult):
        return replace(result, content=[to_recipient_row(raw, tab) for raw in result.content])
    return FlatResult(rows=[to_recipient_row(raw, tab) for raw in result.rows])


class EmployeeRecipientsSource:
    """Data source and bulk gateway for one employee role tab."""

    def __init__(self, client: EmployeesClient, tab: str = "employees") -> None:
        self.client = client
        self.tab = tab

    async def fetch(self, query: TableQuery) -> FetchResult:
        result = await self.client.list_employees(query.to_params(), tab=self.tab)
        return _map_rows(result, self.tab)

    async def execute(self, ids: list[Any], action_payload: dict[str, Any]) -> BulkActionResponse:
        return await self.client.send_emails(ids, action_payload)


class CandidateRecipientsSource:
    def __init__(self, client: CandidatesClient) -> None:
        self.client = client

    async def fetch(self, query: TableQuery) -> FetchResult:
        result = await self.client.list_candidates(query.to_params())
        return _map_rows(result, "candidates")

    async def execute(self, ids: list[Any], action_payload: dict[str, Any]) -> BulkActionResponse:
        return await self.client.send_emails(ids, action_payload)
