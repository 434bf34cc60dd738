from __future__ import annotations

from datetime import datetime


# records are stored as caregiver wall-clock time: naive, minute precision
def to_local_minute(value: datetime | str | None, *, strict: bool = False) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if not text:
            return None
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            if strict:
                raise
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed.replace(second=0, microsecond=0)


def format_local_minute(value: datetime) -> str:
    return value.isoformat(timespec="minutes")
