from __future__ import annotations

from typing import Any

from clients.hr_client_sdk.http_client import HttpClient
from clients.hr_client_sdk.models import BulkActionResponse
from clients.hr_client_sdk.normalizers import FetchResult, normalize_fetch_result


class CandidatesClient:
    def __init__(self, http_client: HttpClient) -> None:
        self.http_client = http_client

    async def list_candidates(self, params: dict[str, Any]) -> FetchResult:
        query = {key: value for key, value in params.items() if value not in (None, "")}
        email_sent = query.pop("emailSent", None)
        if email_sent == "sent":
            query["status"] = "true"
        elif email_sent == "not-sent":
            query["emailSentFilter"] = "not-sent"
        payload = await self.http_client.request("GET", "/api/candidates", params=query)
        return normalize_fetch_result(payload)

    async def send_emails(self, ids: list[Any], email_payload: dict[str, Any]) -> BulkActionResponse:
        body = {"ids": list(ids), **email_payload}
        payload = await self.http_client.request("POST", "/api/candidates/send-email", json_body=body)
        return BulkActionResponse.parse(payload)
