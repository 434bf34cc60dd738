from __future__ import annotations

import re
from typing import Callable

from ingestion.records import Duration

_MINUTES_RE = re.compile(
    r"(?<!\d)(?P<minutes>\d+)\s*min(?:ute)?s?(?![a-z])"
    r"(?:[\s,]*(?:and\s+)?(?P<seconds>\d+)\s*sec(?:ond)?s?(?![a-z]))?",
    re.I,
)
_SECONDS_RE = re.compile(r"(?<!\d)(?P<seconds>\d+)\s*sec(?:ond)?s?(?![a-z])", re.I)
# "1:30" is a duration, "3:39pm" is a clock time
_CLOCK_PAIR_RE = re.compile(
    r"(?<![\d:])(?P<minutes>\d+):(?P<seconds>\d{2})(?![\d:])(?!\s*(?:am|pm|a\.m\.|p\.m\.))",
    re.I,
)


def _regex_matcher(pattern: re.Pattern[str]) -> Callable[[str], Duration | None]:
    def _match(text: str) -> Duration | None:
        found = pattern.search(text)
        if not found:
            return None
        groups = found.groupdict()
        return Duration.from_parts(int(groups.get("minutes") or 0), int(groups.get("seconds") or 0))

    return _match


_MATCHERS: tuple[Callable[[str], Duration | None], ...] = (
    _regex_matcher(_MINUTES_RE),
    _regex_matcher(_SECONDS_RE),
    _regex_matcher(_CLOCK_PAIR_RE),
)


def extract_duration(text: str) -> Duration:
    # absence of a duration is normal, not a parse failure
    for matcher in _MATCHERS:
        found = matcher(text or "")
        if found is not None:
            return found
    return Duration()
