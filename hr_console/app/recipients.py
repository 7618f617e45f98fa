from __future__ import annotations

from typing import Any

from hr_console.app.application.row_reconciler import STATUS_NOT_SENT, STATUS_SENT

DEFAULT_ROLE_BY_TAB = {"employees": "EMPLOYEE", "hr": "HR", "alumni": "EX_EMPLOYEE", "candidates": "CANDIDATE"}


def display_name(raw: dict[str, Any]) -> str | None:
    full = f"{raw.get('firstName') or ''} {raw.get('lastName') or ''}".strip()
    return full or raw.get("email")


def to_recipient_row(raw: dict[str, Any], tab: str = "employees") -> dict[str, Any]:
    email_sent = raw.get("emailSent") is True
    last_email_date = raw.get("emailSentAt") or raw.get("lastEmailDate") or (raw.get("uploadedAt") if email_sent else None)
    row = {
        "id": raw.get("id"),
        "name": display_name(raw),
        "email": raw.get("email"),
        "status": raw.get("status") or ("Applied" if tab == "candidates" else "Active"),
        "emailStatus": STATUS_SENT if email_sent else STATUS_NOT_SENT,
        "lastEmailDate": last_email_date,
        "role": raw.get("role") or raw.get("loginRole") or DEFAULT_ROLE_BY_TAB.get(tab, ""),
        "firstName": raw.get("firstName"),
        "lastName": raw.get("lastName"),
        "phoneNumber": raw.get("phoneNumber"),
        "uploadedAt": raw.get("uploadedAt"),
        "emailSent": raw.get("emailSent"),
    }
    if tab == "candidates":
        row["jobTitle"] = raw.get("jobTitle") or "N/A"
        row["designation"] = row["jobTitle"]
    else:
        row["designation"] = raw.get("designation") or "N/A"
    return row
