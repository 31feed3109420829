from typing import Final

from .utils import get_extension

MEDIA_EXTS: Final = frozenset(
    {
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".bmp",
        ".tif",
        ".tiff",
        ".mp4",
        ".mov",
        ".avi",
        ".mkv",
        ".heic",
        ".heif",
        ".webp",
    }
)


def is_media_file(path: str) -> bool:
    """Check if a file is an image or video file based on its extension."""
    return get_extension(path).lower() in MEDIA_EXTS
