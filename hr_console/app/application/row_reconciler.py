from __future__ import annotations

from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# Candidate field names per canonical field, in priority order.
ID_FIELDS = ("id", "userId", "employeeId", "candidateId")
TIMESTAMP_FIELDS = ("lastEmailDate", "emailSentAt", "email_sent_at", "sentAt", "sent_at", "last_email_date")
SENT_FLAG_FIELDS = ("emailSent", "email_sent", "sent")
NESTED_META_KEY = "meta"

STATUS_SENT = "Sent"
STATUS_NOT_SENT = "Not Sent"


@dataclass(frozen=True)
class NormalizedUpdate:
    """One update record folded onto the canonical id/timestamp/sent fields.

    ``record`` is the original record minus the alias keys that were
    consumed to derive the canonical fields.
    """

    record: dict[str, Any]
    id: Hashable | None
    email: str | None
    timestamp: Any
    sent: bool

    @property
    def correlatable(self) -> bool:
        return self.id is not None or self.email is not None


@dataclass
class ReconcileResult:
    rows: list[dict[str, Any]]
    matched: int = 0
    inserted: int = 0
    skipped: int = 0
    matched_ids: list[Hashable] = field(default_factory=list)


def _present(value: Any) -> bool:
    return value is not None and value != ""


def _first_value(record: Mapping[str, Any], candidates: tuple[str, ...]) -> Any:
    for name in candidates:
        if _present(record.get(name)):
            return record[name]
    return None


def _first_key(record: Mapping[str, Any], candidates: tuple[str, ...]) -> str | None:
    for name in candidates:
        if _present(record.get(name)):
            return name
    return None


def normalize_update(record: Mapping[str, Any]) -> NormalizedUpdate:
    consumed: set[str] = set(SENT_FLAG_FIELDS)

    id_key = _first_key(record, ID_FIELDS)
    canonical_id = record[id_key] if id_key is not None else None
    if isinstance(canonical_id, (dict, list)):
        canonical_id = None
    elif id_key is not None and id_key != "id":
        consumed.add(id_key)

    timestamp_key = _first_key(record, TIMESTAMP_FIELDS)
    timestamp = record[timestamp_key] if timestamp_key is not None else None
    if timestamp_key is not None:
        consumed.add(timestamp_key)
    meta = record.get(NESTED_META_KEY)
    if timestamp is None and isinstance(meta, Mapping):
        timestamp = _first_value(meta, TIMESTAMP_FIELDS)

    explicit = any(record.get(name) is True for name in SENT_FLAG_FIELDS)
    email = record.get("email")
    normalized_email = email.strip().lower() if isinstance(email, str) and email.strip() else None

    return NormalizedUpdate(
        record={key: value for key, value in record.items() if key not in consumed},
        id=canonical_id,
        email=normalized_email,
        timestamp=timestamp,
        sent=explicit or timestamp is not None,
    )


def _row_email(row: Mapping[str, Any]) -> str | None:
    email = row.get("email")
    if isinstance(email, str) and email.strip():
        return email.strip().lower()
    return None


def merge_row(old: Mapping[str, Any], update: NormalizedUpdate, now: Callable[[], str]) -> dict[str, Any]:
    if update.sent:
        if update.timestamp is not None:
            last_email_date = update.timestamp
        elif old.get("emailSent") is True and _present(old.get("lastEmailDate")):
            # a replayed timestamp-less update must not move the date again
            last_email_date = old["lastEmailDate"]
        else:
            last_email_date = now()
        email_status = STATUS_SENT
    else:
        last_email_date = old.get("lastEmailDate")
        email_status = old.get("emailStatus") or STATUS_NOT_SENT

    merged = {**old, **update.record}
    merged["emailSent"] = update.sent or old.get("emailSent") is True
    merged["emailStatus"] = email_status
    merged["lastEmailDate"] = last_email_date
    return merged


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def reconcile_rows(
    rows: list[dict[str, Any]],
    updates: list[Mapping[str, Any]],
    *,
    upsert: bool = False,
    now: Callable[[], str] | None = None,
) -> ReconcileResult:
    """Merge bulk-action update records into ``rows`` without reordering them.

    Records are matched by canonical id first and, when they carry no usable
    id, by lower-cased email. Unmatched records are dropped unless ``upsert``
    is set, in which case the ones with an id are prepended as new rows.
    """
    clock = now or _utc_now_iso
    by_id: dict[Hashable, NormalizedUpdate] = {}
    by_email: dict[str, NormalizedUpdate] = {}
    skipped = 0

    for raw in updates:
        if not isinstance(raw, Mapping):
            skipped += 1
            continue
        update = normalize_update(raw)
        if update.id is not None:
            by_id[update.id] = update
        elif update.email is not None:
            by_email[update.email] = update
        else:
            skipped += 1

    consumed: set[int] = set()
    result_rows: list[dict[str, Any]] = []
    matched_ids: list[Hashable] = []
    for row in rows:
        match = by_id.get(row.get("id"))
        if match is None:
            email = _row_email(row)
            match = by_email.get(email) if email is not None else None
        if match is None:
            result_rows.append(row)
            continue
        consumed.add(id(match))
        matched_ids.append(row.get("id"))
        result_rows.append(merge_row(row, match, clock))

    inserted: list[dict[str, Any]] = []
    if upsert:
        existing_ids = {row.get("id") for row in rows}
        for update in [*by_id.values(), *by_email.values()]:
            if id(update) in consumed:
                continue
            if update.id is None or update.id in existing_ids:
                skipped += 1
                continue
            new_row = merge_row({"id": update.id}, update, clock)
            new_row["id"] = update.id
            inserted.append(new_row)
            existing_ids.add(update.id)

    return ReconcileResult(
        rows=inserted + result_rows,
        matched=len(matched_ids),
        inserted=len(inserted),
        skipped=skipped,
        matched_ids=matched_ids,
    )
