# standardize base schemas for repeated payload patterns

from typing import Optional, Union

from pydantic import BaseModel, Field


# a cleared field ("") is rejected per record at commit, not by request validation
class DurationIn(BaseModel):
    minutes: Optional[Union[int, str]] = 0
    seconds: Optional[Union[int, str]] = 0


# Validate / standardize input JSON payload for /seizures and for reviewed import rows
# date_time stays a string so a bad edit fails that one row, not the whole request
class SeizureIn(BaseModel):
    date_time: Optional[str] = None
    duration: DurationIn = Field(default_factory=DurationIn)
    trigger: Optional[str] = None
    description: Optional[str] = None


# A stored row, as the timeline and the manual-entry echo return it
class SeizureOut(BaseModel):
    id: str
    date_time: str
    duration_minutes: int
    duration_seconds: int
    trigger: str
    description: str


# Shape of pasted text or an uploaded file's content
class ImportParseIn(BaseModel):
    raw_text: str


class DurationOut(BaseModel):
    minutes: int
    seconds: int


class ParsedSeizureOut(BaseModel):
    date_time: str
    duration: DurationOut
    trigger: str
    description: str


class ParseFailureOut(BaseModel):
    line_index: int
    raw_text: str
    reason: str


# Response shape for /imports/parse; records go back to the reviewer for editing
class ImportParseOut(BaseModel):
    source_format: str
    records: list[ParsedSeizureOut]
    failures: list[ParseFailureOut]


class ImportCommitIn(BaseModel):
    records: list[SeizureIn]


class CommitErrorOut(BaseModel):
    record: str
    error: str


class ImportCommitOut(BaseModel):
    succeeded: int
    failed: int
    errors: list[CommitErrorOut]
