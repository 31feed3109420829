"""A command-line tool that renames photos and videos after their capture timestamp."""

from .metadata import read_capture_metadata
from .renamer import process_file, rename_media_files
from .template import render_name

__version__ = "0.1.0"

__all__ = ["process_file", "read_capture_metadata", "rename_media_files", "render_name"]
