from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass(frozen=True)
class CaptureMetadata:
    """Raw capture fields as read from a file's embedded metadata."""

    date_time_original: str | None
    subsec_time_original: str | None = None


@dataclass(frozen=True)
class CaptureTimestamp:
    """A parsed capture moment plus its 6-digit sub-second string."""

    moment: datetime
    subsecond: str = "000000"


@dataclass(frozen=True)
class Options:
    name_format: str
    simulate: bool = False
    recursive: bool = False


@dataclass(frozen=True)
class RenamePlan:
    source: str
    destination: str


class OutcomeStatus(Enum):
    RENAMED = "renamed"
    WOULD_RENAME = "would rename"
    ALREADY_NAMED = "already named"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome:
    """Result of processing a single file."""

    status: OutcomeStatus
    source: str
    destination: str | None = None
    reason: str | None = None
