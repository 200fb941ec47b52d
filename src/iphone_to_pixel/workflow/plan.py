"""
Conversion planning - Turns user paths into an ordered list of jobs.

Directory mode:
    Part1/ -> Part1_Remuxed/ (sibling), every non-hidden file classified
File mode:
    each file converted next to itself (or into --output), images keep their
    name and videos become <stem>.mp4
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..constants import OUTPUT_DIR_SUFFIX, VIDEO_OUTPUT_EXTENSION
from ..exceptions import UsageError
from ..scanner import MediaFile, list_directory
from .jobs import ConversionJob, JobAction, ResolvedPath

logger = logging.getLogger(__name__)


class PlanMode(Enum):
    DIRECTORY = "directory"
    FILES = "files"


@dataclass
class ConversionPlan:
    """Everything a conversion run will do, in processing order."""

    mode: PlanMode
    output_dir: Path | None
    jobs: list[ConversionJob] = field(default_factory=list)
    source: Path | None = None

    @property
    def pending_jobs(self) -> list[ConversionJob]:
        return [job for job in self.jobs if not job.action.is_skip]


def resolve_paths(paths: list[str | Path], cwd: Path) -> list[ResolvedPath]:
    """Resolve user paths against a working directory and stat them."""
    resolved = []
    for raw in paths:
        path = (cwd / Path(raw).expanduser()).resolve()
        resolved.append(
            ResolvedPath(
                path=path,
                exists=path.exists(),
                is_file=path.is_file(),
                is_dir=path.is_dir(),
            )
        )
    return resolved


def output_path_for(media: MediaFile, output_dir: Path) -> Path:
    """Images keep their name; every video becomes <stem>.mp4."""
    if media.kind.is_video:
        return output_dir / f"{media.path.stem}{VIDEO_OUTPUT_EXTENSION}"
    return output_dir / media.name


def _make_job(media: MediaFile, output_dir: Path) -> ConversionJob:
    output_path = output_path_for(media, output_dir)
    if output_path == media.path:
        action = JobAction.SKIP_SELF
    elif output_path.exists():
        action = JobAction.SKIP_EXISTS
    else:
        action = JobAction.for_kind(media.kind)
    return ConversionJob(media=media, output_path=output_path, action=action)


def create_conversion_plan(
    paths: list[str | Path],
    cwd: Path | None = None,
    output: Path | None = None,
    output_suffix: str = OUTPUT_DIR_SUFFIX,
) -> ConversionPlan:
    """
    Create a conversion plan.

    This is a FACTORY function: it validates paths and decides every job
    without touching the filesystem beyond stat calls.

    Args:
        paths: Directories and/or files given by the user
        cwd: Base for relative paths (default: current directory)
        output: File mode only - write outputs here instead of next to sources
        output_suffix: Suffix of the directory mode output folder

    Returns:
        ConversionPlan ready for execution by a runner

    Raises:
        UsageError: no valid paths, several directories, or no supported files
    """
    cwd = cwd or Path.cwd()
    existing = [p for p in resolve_paths(paths, cwd) if p.exists]
    if not existing:
        raise UsageError("No valid paths provided.")

    files = [p.path for p in existing if p.is_file]
    directories = [p.path for p in existing if p.is_dir]

    if len(directories) > 1:
        raise UsageError("Multiple directories provided. Please provide only one directory.")

    if directories and not files:
        source = directories[0]
        output_dir = source.with_name(f"{source.name}{output_suffix}")
        media = [m for m in list_directory(source) if m.kind.is_supported]
        return ConversionPlan(
            mode=PlanMode.DIRECTORY,
            output_dir=output_dir,
            jobs=[_make_job(m, output_dir) for m in media],
            source=source,
        )

    if not files:
        raise UsageError("No valid files or directories provided.")

    if directories:
        logger.warning(f"Ignoring directory {directories[0]} because files were also given")

    media = [MediaFile.from_path(f) for f in files]
    supported = [m for m in media if m.kind.is_supported]
    if not supported:
        raise UsageError("No supported media files provided.")

    output_dir = (cwd / output).resolve() if output is not None else None
    jobs = [_make_job(m, output_dir or m.path.parent) for m in supported]
    return ConversionPlan(mode=PlanMode.FILES, output_dir=output_dir, jobs=jobs)
