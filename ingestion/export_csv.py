from __future__ import annotations

import csv
import io
from datetime import datetime
from typing import Iterable, Mapping

from ingestion.time_utils import to_local_minute

EXPORT_HEADER = ("Date", "Time", "Duration (min)", "Duration (sec)", "Trigger", "Description")


def _export_date(value: datetime) -> str:
    # 10/5/2024, no zero padding
    return f"{value.month}/{value.day}/{value.year}"


def _export_time(value: datetime) -> str:
    # 8:06 PM
    hour = value.hour % 12 or 12
    meridiem = "PM" if value.hour >= 12 else "AM"
    return f"{hour}:{value.minute:02d} {meridiem}"


# rows as returned by list_seizures; output restores through parse_import_text
def export_seizures_csv(rows: Iterable[Mapping]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for row in rows:
        date_time = to_local_minute(row.get("date_time"))
        if date_time is None:
            continue
        writer.writerow(
            (
                _export_date(date_time),
                _export_time(date_time),
                int(row.get("duration_minutes") or 0),
                int(row.get("duration_seconds") or 0),
                row.get("trigger") or "",
                row.get("description") or "",
            )
        )
    return buffer.getvalue()
