import os
from collections.abc import Callable
from typing import Final

from .utils import get_directory, same_path, split_extension

# Highest numeric suffix tried before giving up on a file
MAX_COLLISION_SUFFIX: Final = 1_000_000


class CollisionError(Exception):
    """Raised when no free destination path can be found."""

    def __init__(self, path: str, attempts: int):
        self.path = path
        self.attempts = attempts
        super().__init__(f"No free name for {path} after {attempts} attempts")


def resolve_collision(
    desired_path: str,
    current_path: str,
    *,
    exists: Callable[[str], bool] = os.path.lexists,
    max_suffix: int = MAX_COLLISION_SUFFIX,
) -> str:
    """Return the first destination for `current_path` that is free.

    `desired_path` is returned as is when it is the file's own path or nothing
    exists there. Otherwise `_1`, `_2`, ... is appended to its stem until a
    candidate is free or turns out to be the file itself.

    The result is only free at the time of checking; another process may still
    create it before the caller renames.

    Raises:
        CollisionError: if every suffix up to `max_suffix` is taken
    """
    if same_path(desired_path, current_path) or not exists(desired_path):
        return desired_path

    directory = get_directory(desired_path)
    stem, ext = split_extension(desired_path)
    for counter in range(1, max_suffix + 1):
        candidate = os.path.join(directory, f"{stem}_{counter}{ext}")
        if same_path(candidate, current_path) or not exists(candidate):
            return candidate
    raise CollisionError(desired_path, max_suffix)
