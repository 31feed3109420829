import logging
import os
from collections.abc import Iterator

import click

from .media_utils import is_media_file

logger = logging.getLogger(__name__)


def iter_media_files(directory: str, *, recursive: bool = False) -> Iterator[str]:
    """Iterate depth-first over media files in a directory.

    Entries are read one directory at a time and visited in name order.
    Symlinks and anything that is neither a regular file nor a directory are
    ignored. A directory that cannot be read is reported and skipped; its
    siblings are still visited.
    """
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        logger.error(f"Error opening directory '{directory}': {e.strerror or e}")
        return

    for entry in entries:
        path = os.path.join(directory, entry.name)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file(follow_symlinks=False)
        except OSError as e:
            logger.warning(f"Error getting status of '{path}': {e.strerror or e}")
            continue
        if is_dir:
            if recursive:
                yield from iter_media_files(path, recursive=recursive)
        elif is_file and is_media_file(entry.name):
            yield path


def iter_targets(target: str, *, recursive: bool = False) -> Iterator[str]:
    """Return the media files to process for a command-line target.

    The target is checked before anything is processed: a regular file is
    processed on its own, a directory is traversed.

    Raises:
        click.UsageError: if a file target is combined with recursion
        click.ClickException: if the target is neither a file nor a directory
    """
    if os.path.isdir(target):
        return iter_media_files(target, recursive=recursive)
    if not os.path.isfile(target):
        raise click.ClickException(f"'{target}' is neither a file nor a directory.")
    if recursive:
        raise click.UsageError("Recursive option '-r' is not compatible with specifying a file.")
    if not is_media_file(target):
        logger.warning(f"'{target}' is not a supported image or video file.")
        return iter(())
    return iter((target,))
