# convert pasted caregiver notes or an exported table into reviewable seizure records
# ie: "June 16, 2024 9pm - 2 min seizure, woke up suddenly" -> 2024-06-16T21:00, 2m0s, "Woke up"
# nothing here touches storage; the reviewer edits the batch before commit_batch persists it

from __future__ import annotations

import logging
from datetime import date

from ingestion.csv_rows import ColumnMap, row_to_record, sniff_delimiter, split_header, split_row
from ingestion.extract_datetime import match_datetime
from ingestion.extract_duration import extract_duration
from ingestion.extract_trigger import extract_trigger
from ingestion.format_detect import detect_format
from ingestion.records import (
    DATETIME_UNPARSEABLE,
    SOURCE_CSV,
    SOURCE_TEXT,
    BatchResult,
    ParseFailure,
    RawLine,
    SeizureRecord,
)

logger = logging.getLogger(__name__)


def split_lines(text: str, strip_chars: str | None = None) -> list[RawLine]:
    # keep the physical line number so failures point at the right line
    return [
        RawLine(text=line.strip(strip_chars), index=number)
        for number, line in enumerate((text or "").splitlines(), start=1)
        if line.strip()
    ]


def parse_line(line: str, *, today: date | None = None) -> SeizureRecord | None:
    found = match_datetime(line)
    if found is None:
        return None
    date_time = found.resolve(today)
    if date_time is None:
        return None
    # duration is read with the date/time removed so "3:30pm" cannot become 3m30s
    without_date = found.remove_from(line)
    return SeizureRecord(
        date_time=date_time,
        duration=extract_duration(without_date),
        trigger=extract_trigger(line),
        # full line kept as provenance, date and trigger text included
        description=line.strip(),
    )


def parse_text_lines(text: str, *, today: date | None = None) -> BatchResult:
    batch = BatchResult(source_format=SOURCE_TEXT)
    for raw in split_lines(text):
        record = parse_line(raw.text, today=today)
        if record is None:
            logger.debug("Line %d has no recognizable date: %r", raw.index, raw.text)
            batch.failures.append(ParseFailure(line_index=raw.index, raw_text=raw.text, reason=DATETIME_UNPARSEABLE))
            continue
        batch.records.append(record)
    return batch


def parse_csv_rows(text: str, *, today: date | None = None) -> BatchResult:
    batch = BatchResult(source_format=SOURCE_CSV)
    # only spaces are trimmed here; a leading tab is an empty first column
    lines = split_lines(text, " ")
    if not lines:
        return batch
    header, rows = lines[0], lines[1:]
    delimiter = sniff_delimiter(header.text)
    columns = ColumnMap.from_headers(split_header(header.text, delimiter))
    for raw in rows:
        record = row_to_record(split_row(raw.text, delimiter), columns, today=today)
        if record is None:
            batch.failures.append(ParseFailure(line_index=raw.index, raw_text=raw.text, reason=DATETIME_UNPARSEABLE))
            continue
        batch.records.append(record)
    return batch


def parse_import_text(text: str, *, today: date | None = None) -> BatchResult:
    # a bad line or row never aborts the batch; an empty result is reported, not raised
    if detect_format(text) == SOURCE_CSV:
        batch = parse_csv_rows(text, today=today)
    else:
        batch = parse_text_lines(text, today=today)
    logger.info(
        "Parsed import batch",
        extra={
            "source_format": batch.source_format,
            "records": len(batch.records),
            "failures": len(batch.failures),
        },
    )
    return batch
