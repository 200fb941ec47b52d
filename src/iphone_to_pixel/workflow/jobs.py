"""Job definitions for conversion runs."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..scanner import MediaFile, MediaKind


class JobAction(Enum):
    """What the runner should do with one input file."""

    COPY = "copy"
    REMUX = "remux"
    TRANSCODE = "transcode"
    SKIP_EXISTS = "skip-exists"
    SKIP_SELF = "skip-self"

    @classmethod
    def for_kind(cls, kind: MediaKind) -> "JobAction":
        """Default processing action for a media kind."""
        mapping = {
            MediaKind.IMAGE: cls.COPY,
            MediaKind.VIDEO: cls.REMUX,
            MediaKind.LEGACY_VIDEO: cls.TRANSCODE,
        }
        if kind not in mapping:
            raise ValueError(f"No conversion action for {kind.value} files")
        return mapping[kind]

    @property
    def is_skip(self) -> bool:
        return self in (JobAction.SKIP_EXISTS, JobAction.SKIP_SELF)


@dataclass(frozen=True)
class ConversionJob:
    """
    One input file paired with its output path and action.

    Jobs are data - the runner interprets them and calls the processors.
    """

    media: MediaFile
    output_path: Path
    action: JobAction


@dataclass(frozen=True)
class ResolvedPath:
    """A user-supplied path after resolution against the working directory."""

    path: Path
    exists: bool
    is_file: bool = False
    is_dir: bool = False
