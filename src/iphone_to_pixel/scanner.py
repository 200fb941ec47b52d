"""
File discovery and classification by extension.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .constants import IMAGE_EXTENSIONS, LEGACY_VIDEO_EXTENSIONS, VIDEO_EXTENSIONS


class MediaKind(Enum):
    IMAGE = "image"
    VIDEO = "video"
    LEGACY_VIDEO = "legacy-video"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_extension(cls, ext: str) -> "MediaKind":
        """Get MediaKind from a file extension (case-insensitive)."""
        ext = ext.lower()
        if not ext.startswith("."):
            ext = f".{ext}"
        if ext in IMAGE_EXTENSIONS:
            return cls.IMAGE
        if ext in VIDEO_EXTENSIONS:
            return cls.VIDEO
        if ext in LEGACY_VIDEO_EXTENSIONS:
            return cls.LEGACY_VIDEO
        return cls.UNSUPPORTED

    @property
    def is_video(self) -> bool:
        return self in (MediaKind.VIDEO, MediaKind.LEGACY_VIDEO)

    @property
    def is_supported(self) -> bool:
        return self != MediaKind.UNSUPPORTED


@dataclass(frozen=True)
class MediaFile:
    """A classified file on disk."""

    path: Path
    extension: str
    kind: MediaKind

    @classmethod
    def from_path(cls, path: Path) -> "MediaFile":
        path = path.absolute()
        ext = path.suffix.lower()
        return cls(path=path, extension=ext, kind=MediaKind.from_extension(ext))

    @property
    def name(self) -> str:
        return self.path.name


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def list_directory(source: Path) -> list[MediaFile]:
    """
    Classify every non-hidden regular file directly inside a directory.

    Not recursive. Entries are returned in name order so runs are
    deterministic; unsupported files are included and left to the caller.
    """
    entries = sorted(source.iterdir(), key=lambda p: p.name)
    return [MediaFile.from_path(p) for p in entries if p.is_file() and not is_hidden(p)]


def collect_media_recursive(source: Path) -> list[MediaFile]:
    """
    Collect supported media below a directory, skipping hidden entries.

    Used by fix-dates, which repairs whole Takeout trees in place.
    """
    found: list[MediaFile] = []
    for entry in sorted(source.iterdir(), key=lambda p: p.name):
        if is_hidden(entry):
            continue
        if entry.is_dir():
            found.extend(collect_media_recursive(entry))
        elif entry.is_file():
            media = MediaFile.from_path(entry)
            if media.kind.is_supported:
                found.append(media)
    return found
