from __future__ import annotations

from datetime import datetime

from api.repositories.seizures import SOURCE_IMPORT, insert_seizure
from ingestion.normalize_event import normalize_fields
from ingestion.time_utils import format_local_minute, to_local_minute


def seizure_response(row: dict) -> dict:
    # one response shape for fresh inserts and stored rows
    date_time = to_local_minute(row.get("date_time"))
    return {
        "id": str(row.get("id")),
        "date_time": format_local_minute(date_time) if date_time is not None else "",
        "duration_minutes": int(row.get("duration_minutes") or 0),
        "duration_seconds": int(row.get("duration_seconds") or 0),
        "trigger": row.get("trigger") or "",
        "description": row.get("description") or "",
    }


# commit-loop insert: validate the reviewer's edits, then write; raises on either failure
def insert_reviewed_seizure(
    date_time: datetime | str | None,
    duration_minutes: int | str | None,
    duration_seconds: int | str | None,
    trigger: str,
    description: str,
) -> str:
    normalized = normalize_fields(date_time, duration_minutes, duration_seconds, trigger, description)
    return insert_seizure(
        normalized["date_time"],
        normalized["duration_minutes"],
        normalized["duration_seconds"],
        normalized["trigger"],
        normalized["description"],
        source=SOURCE_IMPORT,
    )
