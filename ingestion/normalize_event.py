# validate and normalize a seizure record right before it is written
# reviewer-edited import rows and single manual entries both pass through here
# missing/invalid required fields raise NormalizationError

from __future__ import annotations

from datetime import datetime
from typing import Protocol, TypedDict

from ingestion.records import UNKNOWN_TRIGGER, Duration
from ingestion.time_utils import to_local_minute


# lets callers catch validation failures separately from DB/runtime errors
class NormalizationError(ValueError):
    pass


class DurationPayload(Protocol):
    minutes: int | str | None
    seconds: int | str | None


# expected input shape; SeizureRecord and the pydantic schemas both satisfy it
class SeizurePayload(Protocol):
    date_time: datetime | str | None
    duration: DurationPayload | None
    trigger: str | None
    description: str | None


# output contract handed to the insert call
class NormalizedSeizure(TypedDict):
    date_time: datetime
    duration_minutes: int
    duration_seconds: int
    trigger: str
    description: str


def normalize_date_time(value: datetime | str | None) -> datetime:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise NormalizationError("date_time is required")
    try:
        normalized = to_local_minute(value, strict=True)
    except ValueError as exc:
        raise NormalizationError(f"invalid datetime format: {value}") from exc
    if normalized is None:
        raise NormalizationError("date_time is required")
    return normalized


def _whole_number(value: int | str | None, field_name: str) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise NormalizationError(f"duration {field_name} must be a whole number") from exc


def normalize_duration(minutes: int | str | None, seconds: int | str | None) -> Duration:
    minutes = _whole_number(minutes, "minutes")
    seconds = _whole_number(seconds, "seconds")
    if minutes < 0 or seconds < 0:
        raise NormalizationError("duration cannot be negative")
    return Duration.from_parts(minutes, seconds)


def normalize_trigger(trigger: str | None) -> str:
    value = (trigger or "").strip()
    return value or UNKNOWN_TRIGGER


def normalize_fields(
    date_time: datetime | str | None,
    minutes: int | str | None,
    seconds: int | str | None,
    trigger: str | None,
    description: str | None,
) -> NormalizedSeizure:
    duration = normalize_duration(minutes, seconds)
    return {
        "date_time": normalize_date_time(date_time),
        "duration_minutes": duration.minutes,
        "duration_seconds": duration.seconds,
        "trigger": normalize_trigger(trigger),
        "description": description or "",
    }


def normalize_seizure(payload: SeizurePayload) -> NormalizedSeizure:
    duration = payload.duration
    return normalize_fields(
        payload.date_time,
        duration.minutes if duration is not None else 0,
        duration.seconds if duration is not None else 0,
        payload.trigger,
        payload.description,
    )
