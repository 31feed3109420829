"""Read capture timestamps from embedded EXIF metadata."""

import logging
from typing import Final

import exifread
from PIL import ExifTags, Image, UnidentifiedImageError
from pillow_heif import register_heif_opener

from .types import CaptureMetadata

logger = logging.getLogger(__name__)

# Let Pillow open HEIC/HEIF files
register_heif_opener()

EXIFREAD_DATETIME_ORIGINAL: Final = "EXIF DateTimeOriginal"
EXIFREAD_SUBSEC_TIME_ORIGINAL: Final = "EXIF SubSecTimeOriginal"

# Tag ids within the EXIF sub-IFD
TAG_DATETIME_ORIGINAL: Final = 0x9003
TAG_SUBSEC_TIME_ORIGINAL: Final = 0x9291


def _tag_text(value: object | None) -> str | None:
    return None if value is None else str(value)


def read_exif_with_exifread(path: str) -> CaptureMetadata | None:
    """Read capture fields with exifread.

    Returns None when exifread finds no EXIF tags at all.

    Raises:
        OSError: if the file cannot be opened
    """
    with open(path, "rb") as f:
        try:
            tags = exifread.process_file(f, details=False)
        except Exception as e:
            # exifread raises assorted errors on truncated or unexpected containers
            logger.debug(f"exifread failed on {path}: {e}")
            return None
    logger.debug(f"Found EXIF tags in {path}: {list(tags.keys())}")
    if not tags:
        return None
    return CaptureMetadata(
        date_time_original=_tag_text(tags.get(EXIFREAD_DATETIME_ORIGINAL)),
        subsec_time_original=_tag_text(tags.get(EXIFREAD_SUBSEC_TIME_ORIGINAL)),
    )


def read_exif_with_pillow(path: str) -> CaptureMetadata | None:
    """Read capture fields through Pillow, including HEIC/HEIF via pillow-heif.

    Returns None when the file is not an image Pillow can open or it carries no EXIF.
    """
    try:
        with Image.open(path) as img:
            exif = img.getexif()
            exif_ifd = exif.get_ifd(ExifTags.IFD.Exif)
    except UnidentifiedImageError:
        return None
    except (SyntaxError, ValueError, Image.DecompressionBombError) as e:
        logger.debug(f"Pillow could not decode EXIF in {path}: {e}")
        return None
    if not exif and not exif_ifd:
        return None
    return CaptureMetadata(
        date_time_original=_tag_text(exif_ifd.get(TAG_DATETIME_ORIGINAL)),
        subsec_time_original=_tag_text(exif_ifd.get(TAG_SUBSEC_TIME_ORIGINAL)),
    )


def read_capture_metadata(path: str) -> CaptureMetadata | None:
    """Return the capture fields of a media file, or None if it has no EXIF data.

    exifread is tried first; Pillow is the fallback for containers exifread
    does not understand.

    Raises:
        OSError: if the file cannot be read
    """
    metadata = read_exif_with_exifread(path)
    if metadata is None or metadata.date_time_original is None:
        logger.debug(f"Falling back to Pillow for {path}")
        metadata = read_exif_with_pillow(path) or metadata
    return metadata
