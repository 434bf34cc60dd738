from __future__ import annotations

from datetime import datetime, timezone

from api.db import get_connection

SOURCE_MANUAL = "manual"
SOURCE_IMPORT = "import"


# the one write the import pipeline performs; the database assigns the id
def insert_seizure(
    date_time: datetime,
    duration_minutes: int,
    duration_seconds: int,
    trigger: str,
    description: str,
    *,
    source: str = SOURCE_MANUAL,
) -> str:
    conn = get_connection()
    try:
        row = conn.execute(
            """
            INSERT INTO seizures (
                date_time, duration_minutes, duration_seconds, trigger, description, created_at, source
            ) VALUES (%s, %s, %s, %s, %s, %s, %s)
            RETURNING id
            """,
            (
                date_time,
                duration_minutes,
                duration_seconds,
                trigger,
                description,
                datetime.now(tz=timezone.utc).isoformat(),
                source,
            ),
        ).fetchone()
        conn.commit()
    finally:
        conn.close()
    return str(row["id"])


# full history for the timeline view and CSV export
def list_seizures() -> list[dict]:
    conn = get_connection()
    try:
        rows = conn.execute(
            """
            SELECT id, date_time, duration_minutes, duration_seconds, trigger, description
            FROM seizures
            ORDER BY date_time DESC
            """
        ).fetchall()
    finally:
        conn.close()
    return [{**dict(row), "id": str(row["id"])} for row in rows]
