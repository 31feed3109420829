import logging
import os
from collections.abc import Callable
from dataclasses import dataclass

from rich.console import Console

from .collisions import CollisionError, resolve_collision
from .list_files import iter_targets
from .metadata import read_capture_metadata
from .template import render_name
from .types import CaptureMetadata, CaptureTimestamp, Options, Outcome, OutcomeStatus, RenamePlan
from .utils import get_directory, get_extension, normalize_subsecond, parse_capture_datetime, same_path, sanitize_filename

logger = logging.getLogger(__name__)

MetadataReader = Callable[[str], CaptureMetadata | None]

# Renames and simulations are reported on stdout, one line each
console = Console(soft_wrap=True, highlight=False, emoji=False)


class MissingTimestampError(Exception):
    """Raised when a file has no usable capture timestamp."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(reason)


@dataclass
class Stats:
    """Outcome counters for a run."""

    renamed: int = 0
    already_named: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.renamed + self.already_named + self.skipped + self.failed

    def record(self, outcome: Outcome) -> None:
        match outcome.status:
            case OutcomeStatus.RENAMED | OutcomeStatus.WOULD_RENAME:
                self.renamed += 1
            case OutcomeStatus.ALREADY_NAMED:
                self.already_named += 1
            case OutcomeStatus.SKIPPED:
                self.skipped += 1
            case OutcomeStatus.FAILED:
                self.failed += 1


def read_capture_timestamp(path: str, read_metadata: MetadataReader) -> CaptureTimestamp:
    """Read and parse the capture timestamp of a file.

    Raises:
        MissingTimestampError: if the file has no usable DateTimeOriginal
        OSError: if the file cannot be read
    """
    metadata = read_metadata(path)
    if metadata is None:
        raise MissingTimestampError(path, f"No EXIF data found in '{path}'")
    value = metadata.date_time_original
    if value is None:
        raise MissingTimestampError(path, f"No DateTimeOriginal EXIF tag found in '{path}'")
    if not value.strip():
        raise MissingTimestampError(path, f"Empty DateTimeOriginal in '{path}'")
    try:
        moment = parse_capture_datetime(value)
    except ValueError:
        raise MissingTimestampError(path, f"Failed to parse date '{value}' in '{path}'") from None
    return CaptureTimestamp(moment=moment, subsecond=normalize_subsecond(metadata.subsec_time_original))


def build_target_path(path: str, timestamp: CaptureTimestamp, name_format: str) -> str:
    """Compose the preferred new path for a file, before collision handling."""
    name = sanitize_filename(render_name(name_format, timestamp))
    return os.path.join(get_directory(path), f"{name}{get_extension(path)}")


def process_file(
    path: str,
    options: Options,
    *,
    read_metadata: MetadataReader | None = None,
) -> Outcome:
    """Rename a single file after its capture timestamp.

    Problems with the file are logged and returned as a SKIPPED or FAILED
    outcome; they are never raised.
    """
    read_metadata = read_metadata or read_capture_metadata

    try:
        timestamp = read_capture_timestamp(path, read_metadata)
    except MissingTimestampError as e:
        logger.warning(e.reason)
        return Outcome(OutcomeStatus.SKIPPED, path, reason=e.reason)
    except OSError as e:
        reason = f"Could not read metadata from '{path}': {e.strerror or e}"
        logger.warning(reason)
        return Outcome(OutcomeStatus.SKIPPED, path, reason=reason)

    target = build_target_path(path, timestamp, options.name_format)
    if same_path(target, path):
        logger.debug(f"'{path}' is already named correctly")
        return Outcome(OutcomeStatus.ALREADY_NAMED, path, destination=path)

    try:
        destination = resolve_collision(target, path)
    except CollisionError as e:
        logger.error(str(e))
        return Outcome(OutcomeStatus.FAILED, path, reason=str(e))

    # A numbered name this file already carries
    if same_path(destination, path):
        logger.debug(f"'{path}' is already named correctly")
        return Outcome(OutcomeStatus.ALREADY_NAMED, path, destination=path)

    plan = RenamePlan(source=path, destination=destination)
    if options.simulate:
        return Outcome(OutcomeStatus.WOULD_RENAME, plan.source, destination=plan.destination)

    try:
        os.rename(plan.source, plan.destination)
    except OSError as e:
        reason = f"Error renaming '{plan.source}' to '{plan.destination}': {e.strerror or e}"
        logger.error(reason)
        return Outcome(OutcomeStatus.FAILED, plan.source, destination=plan.destination, reason=reason)
    return Outcome(OutcomeStatus.RENAMED, plan.source, destination=plan.destination)


def report_outcome(outcome: Outcome) -> None:
    match outcome.status:
        case OutcomeStatus.RENAMED:
            console.print(f"Renamed '{outcome.source}' -> '{outcome.destination}'", markup=False)
        case OutcomeStatus.WOULD_RENAME:
            console.print(f"Simulating '{outcome.source}' -> '{outcome.destination}'", markup=False)


def rename_media_files(
    target: str,
    options: Options,
    *,
    read_metadata: MetadataReader | None = None,
) -> Stats:
    """Rename a media file, or the media files in a directory, after their capture timestamps.

    Args:
        target: File or directory to process
        options: Run options
        read_metadata: Metadata reader, defaults to the EXIF reader

    Returns:
        Outcome counters for the run
    """
    stats = Stats()
    for path in iter_targets(target, recursive=options.recursive):
        outcome = process_file(path, options, read_metadata=read_metadata)
        report_outcome(outcome)
        stats.record(outcome)

    renamed = "would be renamed" if options.simulate else "renamed"
    console.print(
        f"\nProcessed {stats.total} files: {stats.renamed} {renamed}, "
        f"{stats.already_named} already named, {stats.skipped} skipped, {stats.failed} failed"
    )
    return stats
