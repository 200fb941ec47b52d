"""Date fix runner - Recovers capture dates on files in place."""

import logging
from collections.abc import Callable
from pathlib import Path

from ..config import AppConfig
from ..dates import (
    fix_dates_from_timestamp,
    fix_dates_in_place,
    fix_dates_on_photo,
    has_valid_create_date,
    has_valid_photo_date,
)
from ..exceptions import ToolError, UsageError
from ..reporter import Reporter
from ..scanner import MediaFile, MediaKind, collect_media_recursive
from ..sidecar import find_json_sidecar, read_photo_taken_time
from ..tools import Toolchain, validate_tools
from ..workflow import resolve_paths
from .base import RunSummary

logger = logging.getLogger(__name__)


def collect_fix_targets(paths: list[str | Path], cwd: Path | None = None) -> tuple[list[MediaFile], list[MediaFile]]:
    """
    Gather videos and photos to repair.

    Directories are walked recursively; any number of directories and files
    may be mixed.

    Returns:
        Tuple of (videos, photos)

    Raises:
        UsageError: no existing paths or no media found
    """
    existing = [p for p in resolve_paths(paths, cwd or Path.cwd()) if p.exists]
    if not existing:
        raise UsageError("No valid paths provided.")

    media: list[MediaFile] = []
    for entry in existing:
        if entry.is_dir:
            media.extend(collect_media_recursive(entry.path))
    for entry in existing:
        if entry.is_file:
            candidate = MediaFile.from_path(entry.path)
            if candidate.kind.is_supported:
                media.append(candidate)

    videos = [m for m in media if m.kind.is_video]
    photos = [m for m in media if m.kind == MediaKind.IMAGE]
    if not videos and not photos:
        raise UsageError("No media files found.")
    return videos, photos


class DateFixRunner:
    """
    Repairs capture dates one file at a time.

    Resolution order per file:
    1. A valid native date already present -> already OK
    2. A Takeout JSON sidecar timestamp -> fixed (from JSON)
    3. The file's own remaining date tags -> fixed
    4. Nothing usable -> failed (reported, the batch continues)
    """

    def __init__(self, toolchain: Toolchain | None = None, reporter: Reporter | None = None):
        self.toolchain = toolchain or Toolchain()
        self.reporter = reporter or Reporter()

    def run(self, videos: list[MediaFile], photos: list[MediaFile]) -> RunSummary:
        summary = RunSummary()
        exiftool = self.toolchain.exiftool

        for media in videos:
            self._fix_file(
                media.path,
                summary,
                is_valid=lambda p: has_valid_create_date(p, exiftool),
                self_repair=lambda p: fix_dates_in_place(p, exiftool),
            )

        for media in photos:
            self._fix_file(
                media.path,
                summary,
                is_valid=lambda p: has_valid_photo_date(p, exiftool),
                self_repair=lambda p: fix_dates_on_photo(p, exiftool, embed=True),
            )

        return summary

    def _fix_file(
        self,
        path: Path,
        summary: RunSummary,
        is_valid: Callable[[Path], bool],
        self_repair: Callable[[Path], str | None],
    ) -> None:
        name = path.name
        try:
            if is_valid(path):
                self.reporter.log(name)
                summary.already_ok += 1
                return

            if self._fix_from_sidecar(path) and is_valid(path):
                self.reporter.success(f"Fixed (from JSON): {name}")
                summary.fixed += 1
                return

            try:
                self_repair(path)
            except ToolError as e:
                logger.debug(f"Self-repair not possible for {name}: {e}")

            if is_valid(path):
                self.reporter.success(f"Fixed: {name}")
                summary.fixed += 1
            else:
                self.reporter.warn(f"Could not recover date: {name} - no valid source date found")
                summary.record_failure(f"{name}: no valid source date found")

        except (ToolError, OSError) as e:
            if isinstance(e, ToolError) and e.unsupported_format:
                self.reporter.warn(f"Skipped (format not writable): {name}")
            else:
                self.reporter.warn(f"Error processing: {name} - {e}")
            summary.record_failure(f"{name}: {e}")
        except Exception as e:
            logger.exception(f"Unexpected error on {name}")
            self.reporter.warn(f"Error processing: {name} - {e}")
            summary.record_failure(f"{name}: {e}")

    def _fix_from_sidecar(self, path: Path) -> bool:
        """Write the sidecar timestamp, if any. Returns True if something was written."""
        sidecar = find_json_sidecar(path)
        if sidecar is None:
            return False

        timestamp = read_photo_taken_time(sidecar)
        if timestamp is None:
            logger.debug(f"No usable timestamp in {sidecar.name}")
            return False

        try:
            fix_dates_from_timestamp(path, timestamp, self.toolchain.exiftool)
        except ToolError as e:
            # Writing not supported for this format, fall through to self-repair
            logger.debug(f"Could not write sidecar date to {path.name}: {e}")
            return False
        return True


def run_fix_dates(
    paths: list[str | Path],
    cwd: Path | None = None,
    config: AppConfig | None = None,
    reporter: Reporter | None = None,
) -> RunSummary:
    """
    Recover creation dates on media files in place.

    Raises:
        UsageError: invalid paths or no media found
        MissingToolsError: required tools not available
    """
    config = config or AppConfig()
    reporter = reporter or Reporter(config.output.mode)

    videos, photos = collect_fix_targets(paths, cwd)

    reporter.blank()
    reporter.rule()
    reporter.info(f"Fixing dates on {len(videos)} video(s) and {len(photos)} photo(s)")
    reporter.rule()
    reporter.blank()

    toolchain = validate_tools(config.tools)

    summary = DateFixRunner(toolchain, reporter).run(videos, photos)

    reporter.blank()
    reporter.rule()
    reporter.summary(
        f"DONE. Fixed: {summary.fixed}, Already OK: {summary.already_ok}, Failed: {summary.failed}",
        summary.counts(),
    )
    reporter.rule()
    reporter.blank()

    return summary
