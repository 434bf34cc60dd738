# tokenize exported tables (comma or tab separated) and map loose headers to record fields
# ie: "Date,Time,Duration (min),Duration (sec),Trigger,Description" from a previous export

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date

from ingestion.extract_datetime import extract_datetime
from ingestion.records import Duration, SeizureRecord

logger = logging.getLogger(__name__)

TAB = "\t"
COMMA = ","
NOT_FOUND = -1

_LEADING_INT_RE = re.compile(r"\s*(\d+)")


def sniff_delimiter(header_line: str) -> str:
    return TAB if TAB in header_line else COMMA


def split_row(line: str, delimiter: str) -> list[str]:
    if delimiter == TAB:
        return [value.strip() for value in line.split(TAB)]

    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    index = 0
    while index < len(line):
        char = line[index]
        if char == '"':
            if in_quotes and index + 1 < len(line) and line[index + 1] == '"':
                # doubled quote inside a quoted field is a literal quote
                current.append('"')
                index += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        index += 1
    values.append("".join(current).strip())
    return values


def split_header(line: str, delimiter: str) -> list[str]:
    return [token.strip().strip('"').strip().lower() for token in split_row(line, delimiter)]


def _find_column(headers: list[str], keyword: str) -> int:
    # substring containment, first match wins ("duration (min)" is the minutes column)
    for index, header in enumerate(headers):
        if keyword in header:
            return index
    return NOT_FOUND


@dataclass
class ColumnMap:
    date: int = NOT_FOUND
    time: int = NOT_FOUND
    minutes: int = NOT_FOUND
    seconds: int = NOT_FOUND
    trigger: int = NOT_FOUND
    description: int = NOT_FOUND

    @classmethod
    def from_headers(cls, headers: list[str]) -> "ColumnMap":
        return cls(
            date=_find_column(headers, "date"),
            time=_find_column(headers, "time"),
            minutes=_find_column(headers, "min"),
            seconds=_find_column(headers, "sec"),
            trigger=_find_column(headers, "trigger"),
            description=_find_column(headers, "desc"),
        )


def _field(values: list[str], index: int) -> str:
    if index == NOT_FOUND or index >= len(values):
        return ""
    return values[index]


def _to_int(value: str) -> int:
    # leading digits only, so "2 min" reads as 2 and "n/a" as 0
    match = _LEADING_INT_RE.match(value or "")
    return int(match.group(1)) if match else 0


def row_to_record(values: list[str], columns: ColumnMap, *, today: date | None = None) -> SeizureRecord | None:
    combined = f"{_field(values, columns.date)} {_field(values, columns.time)}"
    date_time = extract_datetime(combined, today=today)
    if date_time is None:
        logger.debug("Skipping row with unparseable date/time: %r", combined.strip())
        return None
    return SeizureRecord(
        date_time=date_time,
        duration=Duration.from_parts(
            _to_int(_field(values, columns.minutes)),
            _to_int(_field(values, columns.seconds)),
        ),
        trigger=_field(values, columns.trigger),
        description=_field(values, columns.description),
    )
