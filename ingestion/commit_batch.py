# write a reviewed import batch one record at a time
# a failed insert is tallied and reported; the remaining records are still attempted

from __future__ import annotations

import logging
import os
from datetime import datetime
from typing import Callable, Iterable

from ingestion.normalize_event import SeizurePayload
from ingestion.records import PERSISTENCE_FAILURE, CommitOutcome

logger = logging.getLogger(__name__)

ERROR_PREFIX_CHARS = int(os.getenv("IMPORT_ERROR_PREFIX_CHARS", "50"))

# insert(date_time, minutes, seconds, trigger, description); raises on failure
InsertSeizure = Callable[[datetime | str | None, int | str | None, int | str | None, str, str], object]


def describe_record(record: SeizurePayload, limit: int = ERROR_PREFIX_CHARS) -> str:
    description = (record.description or "").strip()
    if len(description) <= limit:
        return description
    return f"{description[:limit]}..."


def commit_records(records: Iterable[SeizurePayload], insert: InsertSeizure) -> CommitOutcome:
    outcome = CommitOutcome()
    # outcome order matches input order
    for position, record in enumerate(records, start=1):
        duration = record.duration
        try:
            insert(
                record.date_time,
                duration.minutes if duration is not None else 0,
                duration.seconds if duration is not None else 0,
                record.trigger or "",
                record.description or "",
            )
        except Exception as exc:
            outcome.failed += 1
            outcome.errors.append((describe_record(record), str(exc)))
            logger.warning(
                "Import record %d failed to persist: %s",
                position,
                exc,
                extra={"reason": PERSISTENCE_FAILURE},
            )
            continue
        outcome.succeeded += 1
    logger.info(
        "Committed import batch",
        extra={"succeeded": outcome.succeeded, "failed": outcome.failed},
    )
    return outcome
