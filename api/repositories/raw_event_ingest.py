from __future__ import annotations

from datetime import datetime, timezone

from api.db import get_connection


# manual entries that failed validation are kept for later review instead of being lost
def insert_raw_event_ingest(
    raw_text: str,
    parse_status: str,
    error: str | None,
) -> None:
    conn = get_connection()
    try:
        conn.execute(
            """
            INSERT INTO raw_seizure_ingest (raw_text, ingested_at, parse_status, error)
            VALUES (%s, %s, %s, %s)
            """,
            (
                raw_text,
                datetime.now(tz=timezone.utc).isoformat(),
                parse_status,
                error,
            ),
        )
        conn.commit()
    finally:
        conn.close()
