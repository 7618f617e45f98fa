from __future__ import annotations

from typing import Any

from clients.hr_client_sdk.http_client import HttpClient
from clients.hr_client_sdk.models import BulkActionResponse
from clients.hr_client_sdk.normalizers import FetchResult, normalize_fetch_result

ROLE_BY_TAB = {"employees": "EMPLOYEE", "hr": "HR", "alumni": "EX_EMPLOYEE"}


class EmployeesClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    async def list_employees(self, params: dict[str, Any], *, tab: str | None = None) -> FetchResult:
        query = _build_query_params(**params)
        role = ROLE_BY_TAB.get(tab or "")
        if role:
            query["role"] = role
        payload = await self.http_client.request("GET", "/api/employees", params=query)
        return normalize_fetch_result(payload)

    async def send_emails(self, ids: list[Any], email_payload: dict[str, Any]) -> BulkActionResponse:
        body = {"ids": list(ids), **email_payload}
        payload = await self.http_client.request("POST", "/api/employees/send-email", json_body=body)
        return BulkActionResponse.parse(payload)


def _build_query_params(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value not in (None, "")}
