"""
Google Takeout JSON sidecar matching.

Takeout writes one JSON file per media file. The naming convention changed
over the years (and long names get truncated), so several candidates are
tried from most to least specific.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

# Suffixes appended to the full media filename, most specific first
SIDECAR_SUFFIXES = (
    ".supplemental-metadata.json",
    ".suppl.json",
    ".supplemental.json",
    ".json",
)


def sidecar_candidates(media_path: Path) -> list[Path]:
    """List candidate sidecar paths for a media file in matching order."""
    candidates = [media_path.with_name(f"{media_path.name}{suffix}") for suffix in SIDECAR_SUFFIXES]
    candidates.append(media_path.with_name(f"{media_path.stem}.json"))
    return candidates


def find_json_sidecar(media_path: Path) -> Path | None:
    """
    Find the JSON sidecar for a media file.

    Examples:
        IMG_0001.HEIC -> IMG_0001.HEIC.supplemental-metadata.json
        IMG_0001.HEIC -> IMG_0001.HEIC.json
        IMG_0001.HEIC -> IMG_0001.json

    Returns:
        First candidate that exists on disk, or None
    """
    for candidate in sidecar_candidates(media_path):
        if candidate.is_file():
            return candidate
    return None


def _parse_timestamp(value) -> int | None:
    try:
        timestamp = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    if timestamp <= 0:
        return None
    try:
        datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        # Corrupt value, far outside any representable date
        return None
    return timestamp


def read_photo_taken_time(json_path: Path) -> int | None:
    """
    Read the capture time from a sidecar.

    ``photoTakenTime.timestamp`` is preferred; ``creationTime.timestamp`` (upload
    time, less reliable) is the fallback. Both are Unix seconds as strings.

    Returns:
        Unix timestamp in seconds, or None if there is no usable value
    """
    try:
        with open(json_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug(f"Unreadable sidecar {json_path.name}: {e}")
        return None

    if not isinstance(data, dict):
        return None

    for key in ("photoTakenTime", "creationTime"):
        entry = data.get(key)
        if isinstance(entry, dict):
            timestamp = _parse_timestamp(entry.get("timestamp"))
            if timestamp is not None:
                return timestamp

    return None
