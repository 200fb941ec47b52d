"""
Dates module - Capture date resolution and repair via exiftool.

Two tag vocabularies exist because containers and still images disagree on
which field means "capture time":

- Videos (QuickTime family), lowest to highest priority:
  MediaCreateDate -> CreateDate -> DateTimeOriginal -> ContentCreateDate -> CreationDate
  CreationDate is what iPhones write natively; MediaCreateDate is a generic
  container field that is often the epoch or the file-copy time.
- Photos, lowest to highest priority:
  DateTimeDigitized -> CreateDate -> DateTimeOriginal

Resolution is explicit: candidate tags are read in one call, the highest
priority valid value is picked in Python, and that single value is assigned to
every target tag. A zero date ("0000:00:00 ...") counts as missing.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from .constants import ZERO_DATE_PREFIX
from .tools import run_tool

logger = logging.getLogger(__name__)

# Lowest -> highest priority
VIDEO_DATE_CHAIN = ("MediaCreateDate", "CreateDate", "DateTimeOriginal", "ContentCreateDate", "CreationDate")
PHOTO_DATE_CHAIN = ("DateTimeDigitized", "CreateDate", "DateTimeOriginal")

# Tags written when repairing a video
VIDEO_DATE_TARGETS = ("AllDates", "Track*Date", "Media*Date")

# Tags written from a sidecar timestamp
TIMESTAMP_TARGETS = ("AllDates", "DateTimeOriginal", "CreateDate", "ModifyDate")

# QuickTime stores dates in UTC
QUICKTIME_UTC = ("-api", "QuickTimeUTC")


def filesystem_date_targets() -> tuple[str, ...]:
    """Filesystem date tags exiftool can write on this platform."""
    # FileCreateDate is only writable on macOS and Windows
    if sys.platform in ("darwin", "win32"):
        return ("FileModifyDate", "FileCreateDate")
    return ("FileModifyDate",)


def is_valid_date(value: str | None) -> bool:
    """A date is valid when it is non-empty and not the zero-date sentinel."""
    if not value:
        return False
    value = value.strip()
    return bool(value) and not value.startswith(ZERO_DATE_PREFIX)


def read_tag(path: Path, tag: str, exiftool: str = "exiftool") -> str:
    """Read a single tag value as plain text (empty string when absent)."""
    result = run_tool([exiftool, "-s3", f"-{tag}", str(path)], check=False)
    return (result.stdout or "").strip()


def read_date_tags(path: Path, tags: tuple[str, ...], exiftool: str = "exiftool") -> dict[str, str]:
    """
    Read several date tags in one exiftool call.

    Returns:
        Mapping of tag name to value for the tags present in the file
    """
    cmd = [exiftool, "-j", *QUICKTIME_UTC, *(f"-{tag}" for tag in tags), str(path)]
    result = run_tool(cmd, check=False)
    try:
        records = json.loads(result.stdout or "[]")
    except ValueError:
        logger.debug(f"Could not parse exiftool output for {path.name}")
        return {}

    if not records or not isinstance(records[0], dict):
        return {}

    return {tag: str(records[0][tag]) for tag in tags if tag in records[0]}


def select_date(tags: dict[str, str], chain: tuple[str, ...]) -> str | None:
    """
    Pick the highest-priority valid date.

    Args:
        tags: Tag values read from a file
        chain: Tag names ordered lowest -> highest priority

    Returns:
        The winning value, or None when no tag in the chain holds a valid date
    """
    for tag in reversed(chain):
        value = tags.get(tag)
        if is_valid_date(value):
            return value.strip()
    return None


def write_dates(
    path: Path,
    value: str,
    targets: tuple[str, ...],
    exiftool: str = "exiftool",
    preserve_mtime: bool = False,
) -> None:
    """
    Assign one date value to every target tag, overwriting in place.

    Raises:
        ToolError: if exiftool rejects the write (e.g. unsupported format)
    """
    cmd = [exiftool, "-quiet", "-overwrite_original", *QUICKTIME_UTC]
    if preserve_mtime:
        cmd.append("-P")
    cmd.extend(f"-{target}={value}" for target in targets)
    cmd.append(str(path))
    run_tool(cmd)


def has_valid_create_date(path: Path, exiftool: str = "exiftool") -> bool:
    """Check whether a video carries a usable CreateDate."""
    return is_valid_date(read_tag(path, "CreateDate", exiftool))


def has_valid_photo_date(path: Path, exiftool: str = "exiftool") -> bool:
    """Check whether a photo carries a usable DateTimeOriginal."""
    return is_valid_date(read_tag(path, "DateTimeOriginal", exiftool))


def copy_dates_from_source(source: Path, target: Path, exiftool: str = "exiftool") -> str | None:
    """
    Copy the capture date of a video onto another file.

    The transcoder does not reliably carry every date tag across a remux, so
    the date is resolved from the source and written explicitly. Source and
    target may be the same file.

    Returns:
        The date written, or None when the source has no valid date
    """
    value = select_date(read_date_tags(source, VIDEO_DATE_CHAIN, exiftool), VIDEO_DATE_CHAIN)
    if value is None:
        logger.debug(f"No valid date tag in {source.name}")
        return None

    write_dates(target, value, VIDEO_DATE_TARGETS + filesystem_date_targets(), exiftool)
    return value


def fix_dates_in_place(path: Path, exiftool: str = "exiftool") -> str | None:
    """Repair a video's dates from its own remaining metadata."""
    return copy_dates_from_source(path, path, exiftool)


def fix_dates_on_photo(path: Path, exiftool: str = "exiftool", embed: bool = False) -> str | None:
    """
    Set a photo's filesystem dates from its capture date.

    Galleries fall back to file dates when sorting, so these must match the
    shutter time rather than the copy time.

    Args:
        path: Photo to repair in place
        exiftool: exiftool executable
        embed: Also write DateTimeOriginal (self-repair from partial tags)

    Returns:
        The date written, or None when the photo has no valid date tag
    """
    value = select_date(read_date_tags(path, PHOTO_DATE_CHAIN, exiftool), PHOTO_DATE_CHAIN)
    if value is None:
        logger.debug(f"No valid date tag in {path.name}")
        return None

    targets = filesystem_date_targets()
    if embed:
        targets = ("DateTimeOriginal",) + targets
    write_dates(path, value, targets, exiftool, preserve_mtime=True)
    return value


def unix_to_exif_date(timestamp: int) -> str:
    """Format Unix seconds as an exiftool date (``YYYY:MM:DD HH:MM:SS``, UTC)."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y:%m:%d %H:%M:%S")


def fix_dates_from_timestamp(path: Path, timestamp: int, exiftool: str = "exiftool") -> str:
    """
    Write a sidecar timestamp into every relevant date field.

    This is a flat assignment: the source is one external number, not a set of
    competing in-file tags.

    Returns:
        The date written
    """
    value = unix_to_exif_date(timestamp)
    write_dates(path, value, TIMESTAMP_TARGETS + filesystem_date_targets(), exiftool)
    return value
