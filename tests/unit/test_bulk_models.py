from clients.hr_client_sdk.models import BulkActionResponse, FailureRecord

from hr_console.app.application.bulk_feedback import report_failures, summarize


def test_missing_updated_is_distinct_from_empty_updated() -> None:
    missing = BulkActionResponse.parse({"failed": []})
    empty = BulkActionResponse.parse({"updated": [], "failed": []})

    assert missing.updated is None
    assert empty.updated == []


def test_failure_aliases_resolve_id_and_reason() -> None:
    response = BulkActionResponse.parse(
        {
            "updated": [{"id": 1}, "junk"],
            "failed": [
                {"candidateId": 8, "message": "mailbox full"},
                {"userId": 9},
                {"error": "bounced"},
            ],
        }
    )

    assert response.updated == [{"id": 1}]
    assert [failure.display_id for failure in response.failed] == ["8", "9", "unknown"]
    assert [failure.reason for failure in response.failed] == ["mailbox full", "Unknown error", "bounced"]


def test_batch_status_failed_is_flagged() -> None:
    response = BulkActionResponse.parse({"status": "failed", "message": "Failed to send email for some recipients."})

    assert response.batch_failed is True
    assert response.failed == []


def test_non_mapping_payload_parses_as_unknown_outcome() -> None:
    response = BulkActionResponse.parse(None)

    assert response.updated is None
    assert response.batch_failed is False


def test_summary_wording() -> None:
    assert summarize(1, 1) == "Sent 1, Failed 1"
    assert summarize(3, 0) == "Successfully sent 3 emails!"
    assert summarize(1, 0) == "Successfully sent 1 email!"
    assert summarize(0, 0) == "No emails were sent."


def test_failure_report_is_capped() -> None:
    failures = [FailureRecord(id=index, error="bounced") for index in range(15)]

    reported = report_failures(failures, cap=10)

    assert len(reported) == 10
    assert reported[0].text == "Failed to send to ID 0: bounced"
