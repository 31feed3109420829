"""Utility functions for rename-media-files."""

import logging
import os
from datetime import datetime
from typing import Final

logger = logging.getLogger(__name__)

# Characters that are not allowed in file names on common filesystems
ILLEGAL_FILENAME_CHARS: Final = '/\\:*?"<>|'
_ILLEGAL_TRANSLATION: Final = str.maketrans({c: "_" for c in ILLEGAL_FILENAME_CHARS})

EXIF_DATETIME_FORMAT: Final = "%Y:%m:%d %H:%M:%S"
SUBSECOND_DIGITS: Final = 6
DEFAULT_SUBSECOND: Final = "0" * SUBSECOND_DIGITS


def sanitize_filename(name: str) -> str:
    """Replace characters that are illegal in filenames with underscores.

    Only meant for a synthesized base name; directory components and the
    extension must not be passed through here.
    """
    return name.translate(_ILLEGAL_TRANSLATION)


def split_extension(path: str) -> tuple[str, str]:
    """Split the file name of `path` into (stem, extension).

    The extension runs from the last "." of the file name to its end and keeps
    its original case. It is empty when the file name has no ".".
    """
    name = os.path.basename(path)
    dot = name.rfind(".")
    if dot == -1:
        return name, ""
    return name[:dot], name[dot:]


def get_extension(path: str) -> str:
    return split_extension(path)[1]


def get_directory(path: str) -> str:
    """Return the directory part of `path`, or "." when there is none."""
    return os.path.dirname(path) or "."


def same_path(a: str, b: str) -> bool:
    return os.path.normpath(a) == os.path.normpath(b)


def parse_capture_datetime(value: str) -> datetime:
    """Parse an EXIF `YYYY:MM:DD HH:MM:SS` timestamp.

    Raises:
        ValueError: if the value does not match the EXIF layout
    """
    return datetime.strptime(value.strip(), EXIF_DATETIME_FORMAT)


def normalize_subsecond(value: str | None) -> str:
    """Normalize an EXIF sub-second field to exactly six digits.

    Longer values are truncated, shorter ones are right-padded with zeros.
    Missing, empty or non-numeric values give "000000".
    """
    if value is None:
        return DEFAULT_SUBSECOND
    value = value.strip()
    if not value:
        return DEFAULT_SUBSECOND
    if not (value.isascii() and value.isdigit()):
        logger.debug(f"Ignoring non-numeric sub-second value {value!r}")
        return DEFAULT_SUBSECOND
    return value[:SUBSECOND_DIGITS].ljust(SUBSECOND_DIGITS, "0")
