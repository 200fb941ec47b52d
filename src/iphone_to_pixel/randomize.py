"""
Randomize filenames so Google Photos does not merge unrelated files.

Takeout parts from different years reuse camera names like IMG_0001.HEIC;
uploading them together can collide. Every regular file in the directory gets
a random UUID name with its extension kept.
"""

import uuid
from pathlib import Path

from .exceptions import UsageError


def randomize_filenames(directory: Path) -> int:
    """
    Rename every regular file in a directory (non-recursive) to a UUID.

    Returns:
        Number of files renamed

    Raises:
        UsageError: if the path is missing or not a directory
    """
    if not directory.exists():
        raise UsageError(f"Directory '{directory}' not found.")
    if not directory.is_dir():
        raise UsageError(f"'{directory}' is not a directory.")

    count = 0
    for entry in sorted(directory.iterdir()):
        if not entry.is_file():
            continue
        entry.rename(directory / f"{uuid.uuid4()}{entry.suffix}")
        count += 1
    return count
