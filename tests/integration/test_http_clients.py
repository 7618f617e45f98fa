import asyncio
import json

import httpx
import pytest

from clients.hr_client_sdk.candidates_client import CandidatesClient
from clients.hr_client_sdk.employees_client import EmployeesClient
from clients.hr_client_sdk.errors import ApiError
from clients.hr_client_sdk.http_client import HttpClient
from clients.hr_client_sdk.normalizers import FlatResult, PaginatedResult

from hr_console.app.bootstrap import ConsoleBootstrap
from hr_console.app.config import AppConfig
from hr_console.app.infrastructure.sdk_adapter.recipients_adapter import CandidateRecipientsSource
from hr_console.app.table_controller import TableQuery


class _Transport:
    def __init__(self, responses):
        self.responses = responses
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.responses[len(self.requests) - 1]
        if isinstance(result, Exception):
            raise result
        return result


def _client(transport: _Transport, **kwargs) -> HttpClient:
    return HttpClient(
        "http://hr.test",
        retry_max_attempts=kwargs.pop("retry_max_attempts", 3),
        retry_backoff_ms=0,
        transport=httpx.MockTransport(transport),
        **kwargs,
    )


def test_retry_on_5xx_and_timeout() -> None:
    transport = _Transport(
        [
            httpx.ReadTimeout("timeout"),
            httpx.Response(503, json={"code": "INTERNAL_ERROR", "message": "down"}),
            httpx.Response(200, json=[{"id": 1}]),
        ]
    )
    client = _client(transport)

    payload = asyncio.run(client.request("GET", "/api/employees"))

    assert payload == [{"id": 1}]
    assert len(transport.requests) == 3


def test_no_retry_on_4xx() -> None:
    transport = _Transport([httpx.Response(403, json={"code": "PERMISSION_DENIED", "message": "no"})])
    client = _client(transport)

    with pytest.raises(ApiError) as raised:
        asyncio.run(client.request("GET", "/api/employees"))

    assert raised.value.code == "PERMISSION_DENIED"
    assert len(transport.requests) == 1


def test_post_is_never_retried() -> None:
    transport = _Transport([httpx.Response(502, text="bad gateway"), httpx.Response(200, json={})])
    client = _client(transport)

    with pytest.raises(ApiError) as raised:
        asyncio.run(client.request("POST", "/api/employees/send-email", json_body={"ids": [1]}))

    assert raised.value.status_code == 502
    assert len(transport.requests) == 1


def test_timeout_after_last_attempt_maps_to_timeout_error() -> None:
    transport = _Transport([httpx.ReadTimeout("t1"), httpx.ReadTimeout("t2")])
    client = _client(transport, retry_max_attempts=2)

    with pytest.raises(ApiError) as raised:
        asyncio.run(client.request("GET", "/api/candidates"))

    assert raised.value.code == "TIMEOUT_ERROR"


def test_bearer_token_is_sent_when_configured() -> None:
    transport = _Transport([httpx.Response(204)])
    client = _client(transport, access_token="abc")

    payload = asyncio.run(client.request("GET", "api/employees"))

    assert payload == {}
    assert transport.requests[0].headers["Authorization"] == "Bearer abc"
    assert transport.requests[0].url.path == "/api/employees"


def test_employees_client_adds_role_for_tab_and_drops_empty_params() -> None:
    transport = _Transport([httpx.Response(200, json={"content": [{"id": 1}], "totalElements": 30, "totalPages": 3})])
    employees = EmployeesClient(_client(transport))

    result = asyncio.run(employees.list_employees({"page": 0, "size": 10, "search": "", "designation": "Lead"}, tab="hr"))

    params = transport.requests[0].url.params
    assert params["role"] == "HR"
    assert params["designation"] == "Lead"
    assert "search" not in params
    assert result == PaginatedResult(content=[{"id": 1}], total_elements=30, total_pages=3)


def test_send_emails_posts_ids_with_payload() -> None:
    transport = _Transport([httpx.Response(200, json={"updated": [{"id": 1}], "failed": []})])
    employees = EmployeesClient(_client(transport))

    response = asyncio.run(employees.send_emails([1], {"emailType": "welcome"}))

    body = json.loads(transport.requests[0].content)
    assert body == {"ids": [1], "emailType": "welcome"}
    assert response.updated == [{"id": 1}]


def test_candidates_email_sent_filter_maps_to_backend_params() -> None:
    transport = _Transport([httpx.Response(200, json=[]), httpx.Response(200, json=[])])
    candidates = CandidatesClient(_client(transport))

    async def scenario():
        sent = await candidates.list_candidates({"page": 0, "emailSent": "sent"})
        not_sent = await candidates.list_candidates({"page": 0, "emailSent": "not-sent"})
        return sent, not_sent

    sent, _ = asyncio.run(scenario())

    assert transport.requests[0].url.params["status"] == "true"
    assert "emailSent" not in transport.requests[0].url.params
    assert transport.requests[1].url.params["emailSentFilter"] == "not-sent"
    assert sent == FlatResult(rows=[])


def test_candidate_source_maps_rows_for_the_table() -> None:
    transport = _Transport([httpx.Response(200, json=[{"id": 3, "email": "c@x.com", "jobTitle": "QA"}])])
    source = CandidateRecipientsSource(CandidatesClient(_client(transport)))

    result = asyncio.run(source.fetch(TableQuery(search="c@", page=0, page_size=10)))

    assert transport.requests[0].url.params["search"] == "c@"
    assert result.rows[0]["jobTitle"] == "QA"
    assert result.rows[0]["status"] == "Applied"


def test_bootstrap_wires_an_employee_table_end_to_end() -> None:
    transport = _Transport(
        [
            httpx.Response(200, json=[{"id": 1, "firstName": "Ana", "email": "ana@x.com", "designation": "Lead"}]),
            httpx.Response(200, json={"updated": [{"id": 1, "emailSent": True, "emailSentAt": "2024-04-04T00:00:00Z"}]}),
        ]
    )
    config = AppConfig(api_base_url="http://hr.test")
    console = ConsoleBootstrap(config=config, http_client=_client(transport))
    table = console.employee_table("alumni")

    async def scenario():
        await table.refresh()
        table.toggle_row(1)
        outcome = await table.run_bulk_action({"emailType": "reminder"})
        await console.aclose()
        return outcome

    outcome = asyncio.run(scenario())

    assert transport.requests[0].url.params["role"] == "EX_EMPLOYEE"
    assert outcome.summary == "Successfully sent 1 email!"
    snapshot = table.snapshot()
    assert snapshot.cells[0]["emailStatus"] == "Sent"
    assert snapshot.cells[0]["lastEmailDate"] == "2024-04-04T00:00:00Z"
    assert snapshot.selected_ids == []
