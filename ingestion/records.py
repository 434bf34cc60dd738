# shared shapes passed between the import parser, the review step and the commit loop
# every field is defaulted so each code path produces a complete object

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

DATETIME_UNPARSEABLE = "DateTimeUnparseable"
PERSISTENCE_FAILURE = "PersistenceFailure"

UNKNOWN_TRIGGER = "Unknown"

SOURCE_CSV = "csv"
SOURCE_TEXT = "text"


@dataclass
class RawLine:
    text: str
    index: int


@dataclass
class Duration:
    minutes: int = 0
    seconds: int = 0

    @classmethod
    def from_parts(cls, minutes: int, seconds: int) -> "Duration":
        # fold 90 seconds into 1m30s so seconds always stays in 0..59
        minutes = max(0, int(minutes))
        seconds = max(0, int(seconds))
        extra, seconds = divmod(seconds, 60)
        return cls(minutes=minutes + extra, seconds=seconds)


@dataclass
class SeizureRecord:
    date_time: datetime
    duration: Duration = field(default_factory=Duration)
    trigger: str = UNKNOWN_TRIGGER
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "date_time": self.date_time.isoformat(timespec="minutes"),
            "duration": {"minutes": self.duration.minutes, "seconds": self.duration.seconds},
            "trigger": self.trigger,
            "description": self.description,
        }


@dataclass
class ParseFailure:
    line_index: int
    raw_text: str
    reason: str = DATETIME_UNPARSEABLE

    def to_dict(self) -> dict:
        return {"line_index": self.line_index, "raw_text": self.raw_text, "reason": self.reason}


@dataclass
class BatchResult:
    records: list[SeizureRecord] = field(default_factory=list)
    failures: list[ParseFailure] = field(default_factory=list)
    source_format: str = SOURCE_TEXT

    def to_dict(self) -> dict:
        return {
            "source_format": self.source_format,
            "records": [record.to_dict() for record in self.records],
            "failures": [failure.to_dict() for failure in self.failures],
        }


@dataclass
class CommitOutcome:
    succeeded: int = 0
    failed: int = 0
    # (description prefix, error message) in input order
    errors: list[tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "succeeded": self.succeeded,
            "failed": self.failed,
            "errors": [{"record": prefix, "error": message} for prefix, message in self.errors],
        }
