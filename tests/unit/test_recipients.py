from hr_console.app.recipients import to_recipient_row
from hr_console.app.ui.filters import FilterDescriptor, FilterOption, filter_options


def test_employee_row_mapping_uses_defaults() -> None:
    row = to_recipient_row({"id": 4, "firstName": "Ana", "lastName": "Ruiz", "email": "ana@x.com"}, tab="hr")

    assert row["name"] == "Ana Ruiz"
    assert row["status"] == "Active"
    assert row["role"] == "HR"
    assert row["emailStatus"] == "Not Sent"
    assert row["lastEmailDate"] is None
    assert row["designation"] == "N/A"


def test_candidate_row_mapping_prefers_sent_timestamp() -> None:
    raw = {
        "id": 11,
        "email": "cand@x.com",
        "emailSent": True,
        "emailSentAt": "2024-03-01T10:00:00Z",
        "uploadedAt": "2024-02-01T10:00:00Z",
        "jobTitle": "Designer",
    }

    row = to_recipient_row(raw, tab="candidates")

    assert row["name"] == "cand@x.com"
    assert row["status"] == "Applied"
    assert row["emailStatus"] == "Sent"
    assert row["lastEmailDate"] == "2024-03-01T10:00:00Z"
    assert row["designation"] == "Designer"


def test_sent_candidate_without_timestamp_falls_back_to_upload_date() -> None:
    row = to_recipient_row({"id": 1, "emailSent": True, "uploadedAt": "2024-02-01"}, tab="candidates")

    assert row["lastEmailDate"] == "2024-02-01"


def test_filter_options_come_from_loaded_rows_unless_declared() -> None:
    rows = [{"designation": "Lead"}, {"designation": ""}, {"designation": "Engineer"}, {"designation": "Lead"}]
    derived = FilterDescriptor(key="designation")
    declared = FilterDescriptor(key="emailSent", options=(FilterOption(label="Sent", value="sent"),))

    assert [option.value for option in filter_options(derived, rows)] == ["Lead", "Engineer"]
    assert filter_options(declared, rows) == [FilterOption(label="Sent", value="sent")]
    assert derived.display_label == "designation"
