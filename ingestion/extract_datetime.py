# find the date (and optional time) a caregiver wrote inside one line of text
# ie: "June 16, 2024 9pm - 2 min seizure" -> 2024-06-16 21:00 (naive local time)

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable

_MONTH_NAMES = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?|"
    r"sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
_MONTHS = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}
DEFAULT_HOUR = 12
DEFAULT_MINUTE = 0

_MERIDIEM = r"(?:am|pm|a\.m\.|p\.m\.)(?![a-z])"
# a number directly followed by a duration unit is never a clock time ("June 20 2 min")
_TIME = (
    r"(?P<time>\d{1,4}(?::\d{2})?(?:\s*" + _MERIDIEM + r")?(?:\s*\(ish\))?)"
    r"(?![\d:]|\s*(?:min|sec|hour|hr))"
)
_TIME_LEAD = r"[\s,]*(?:(?:at|around|about|approx(?:\.|imately)?|~|@)\s*)?"
_OPTIONAL_TIME = r"(?:" + _TIME_LEAD + _TIME + r")?"
# "June 16, 2024" / "June 16, 24" / "16 March 2024"; a bare 2-digit number is only a year after a comma
# and never when it reads as a clock time or a duration ("June 16, 10pm", "June 16, 12 min")
_OPTIONAL_NAMED_YEAR = (
    r"(?:(?:,\s*|\s+(?=\d{4}(?!\d)))(?P<year>\d{4}|\d{2})"
    r"(?![\d:]|\s*(?:" + _MERIDIEM + r"|min|sec|hour|hr)))?"
)

_NUMERIC_DATE_RE = re.compile(
    r"(?<!\d)(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{2,4})(?!\d)" + _OPTIONAL_TIME,
    re.I,
)
_MONTH_DAY_RE = re.compile(
    r"\b(?P<month>" + _MONTH_NAMES + r")\.?\s+(?P<day>\d{1,2})(?:st|nd|rd|th)?(?!\d)"
    + _OPTIONAL_NAMED_YEAR
    + _OPTIONAL_TIME,
    re.I,
)
_DAY_MONTH_RE = re.compile(
    r"\b(?P<day>\d{1,2})(?:st|nd|rd|th)?\s+(?P<month>" + _MONTH_NAMES + r")\b\.?"
    + _OPTIONAL_NAMED_YEAR
    + _OPTIONAL_TIME,
    re.I,
)
# spreadsheet exports; only reached when none of the caregiver phrasings matched
_ISO_DATE_RE = re.compile(
    r"(?<!\d)(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})(?!\d)"
    r"(?:(?:T|\s+)(?P<time>\d{1,2}:\d{2})(?::\d{2}(?:\.\d+)?)?)?",
    re.I,
)
_TRAILING_MERIDIEM_RE = re.compile(r"([ap])\.?m\.?$")


@dataclass
class DateTimeMatch:
    start: int
    end: int
    month: str
    day: str
    year: str | None = None
    time: str | None = None

    def resolve(self, today: date | None = None) -> datetime | None:
        today = today or date.today()
        try:
            day = date(_resolve_year(self.year, today), _month_number(self.month), int(self.day))
        except ValueError:
            # 13/40/2024 names no real day; reject instead of guessing
            return None
        hour, minute = _resolve_time(self.time)
        return datetime(day.year, day.month, day.day, hour, minute)

    def remove_from(self, text: str) -> str:
        return f"{text[:self.start]} {text[self.end:]}"


def _resolve_time(token: str | None) -> tuple[int, int]:
    if not token:
        return DEFAULT_HOUR, DEFAULT_MINUTE
    hour, minute = parse_time_token(token)
    if hour > 23 or minute > 59:
        # "about 90 s" is not a clock reading; the date still stands at noon
        return DEFAULT_HOUR, DEFAULT_MINUTE
    return hour, minute


def _resolve_year(raw: str | None, today: date) -> int:
    if not raw:
        return today.year
    value = int(raw)
    if len(raw) == 2:
        return 2000 + value
    return value


def _month_number(raw: str) -> int:
    if raw.isdigit():
        return int(raw)
    # unknown names fall back to January
    return _MONTHS.get(raw.strip().rstrip(".").lower(), 1)


def parse_time_token(token: str) -> tuple[int, int]:
    value = token.lower().replace("(ish)", "").strip()
    meridiem = None
    suffix = _TRAILING_MERIDIEM_RE.search(value)
    if suffix:
        meridiem = suffix.group(1) + "m"
        value = value[: suffix.start()].strip()

    if ":" in value:
        hours_raw, minutes_raw = value.split(":", 1)
        hour = int(hours_raw)
        minute = int(minutes_raw)
    elif len(value) <= 2:
        hour, minute = int(value), 0
    elif len(value) == 3:
        # "930" -> 9:30
        hour, minute = int(value[0]), int(value[1:])
    else:
        hour, minute = int(value[:2]), int(value[2:4])

    if meridiem == "pm" and hour < 12:
        hour += 12
    if meridiem == "am" and hour == 12:
        hour = 0
    return hour, minute


def _regex_matcher(pattern: re.Pattern[str]) -> Callable[[str], DateTimeMatch | None]:
    def _match(text: str) -> DateTimeMatch | None:
        found = pattern.search(text)
        if not found:
            return None
        groups = found.groupdict()
        return DateTimeMatch(
            start=found.start(),
            end=found.end(),
            month=groups["month"],
            day=groups["day"],
            year=groups.get("year"),
            time=groups.get("time"),
        )

    return _match


# priority order matters: first family that matches anywhere in the text wins
_MATCHERS: tuple[Callable[[str], DateTimeMatch | None], ...] = (
    _regex_matcher(_NUMERIC_DATE_RE),
    _regex_matcher(_MONTH_DAY_RE),
    _regex_matcher(_DAY_MONTH_RE),
    _regex_matcher(_ISO_DATE_RE),
)


def match_datetime(text: str) -> DateTimeMatch | None:
    for matcher in _MATCHERS:
        found = matcher(text)
        if found is not None:
            return found
    return None


def extract_datetime(text: str, *, today: date | None = None) -> datetime | None:
    found = match_datetime(text or "")
    if found is None:
        return None
    return found.resolve(today)


def strip_datetime(text: str) -> str:
    found = match_datetime(text or "")
    if found is None:
        return text
    return found.remove_from(text)
