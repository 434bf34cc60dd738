from __future__ import annotations

from ingestion.records import SOURCE_CSV, SOURCE_TEXT

_HEADER_COMPANION_WORDS = ("time", "duration", "trigger")


def _non_empty_lines(text: str) -> list[str]:
    return [line for line in (text or "").splitlines() if line.strip()]


# any header naming a date plus one other known column is a table export
def looks_like_csv_header(line: str) -> bool:
    lower = line.lower()
    return "date" in lower and any(word in lower for word in _HEADER_COMPANION_WORDS)


def detect_format(text: str) -> str:
    lines = _non_empty_lines(text)
    if len(lines) < 2:
        return SOURCE_TEXT
    return SOURCE_CSV if looks_like_csv_header(lines[0]) else SOURCE_TEXT
