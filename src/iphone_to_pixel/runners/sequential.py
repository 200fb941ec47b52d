"""Sequential runner - Converts planned files one at a time."""

import logging
from pathlib import Path

from ..config import AppConfig
from ..dates import fix_dates_on_photo
from ..exceptions import ToolError
from ..processors import process_image, process_legacy_video, process_video
from ..reporter import Reporter
from ..scanner import MediaKind
from ..tools import Toolchain, validate_tools
from ..workflow import ConversionJob, ConversionPlan, JobAction, PlanMode, create_conversion_plan
from .base import RunSummary

logger = logging.getLogger(__name__)


class SequentialRunner:
    """
    Sequential conversion runner.

    Executes jobs strictly in plan order; each external tool call finishes
    before the next file is looked at. The presence of an output file is the
    only "already processed" marker, so re-running is idempotent.
    """

    def __init__(
        self,
        toolchain: Toolchain | None = None,
        config: AppConfig | None = None,
        reporter: Reporter | None = None,
    ):
        self.toolchain = toolchain or Toolchain()
        self.config = config or AppConfig()
        self.reporter = reporter or Reporter(self.config.output.mode)

    def run(self, plan: ConversionPlan) -> RunSummary:
        """
        Execute a conversion plan.

        Args:
            plan: The ConversionPlan to execute

        Returns:
            RunSummary with per-run counters
        """
        summary = RunSummary()

        if plan.output_dir is not None:
            plan.output_dir.mkdir(parents=True, exist_ok=True)

        for job in plan.jobs:
            self._run_job(job, plan, summary)

        return summary

    def _run_job(self, job: ConversionJob, plan: ConversionPlan, summary: RunSummary) -> None:
        media = job.media

        if job.action == JobAction.SKIP_SELF:
            logger.info(f"Skipping {media.name}: output would overwrite the input")
            summary.skipped += 1
            return

        # Re-checked here: an earlier job in this run may have produced the same output
        if job.action == JobAction.SKIP_EXISTS or job.output_path.exists():
            summary.skipped += 1
            if plan.mode == PlanMode.FILES and media.kind == MediaKind.IMAGE:
                self._repair_existing_image(job.output_path)
            return

        try:
            written = self._execute(job)
        except Exception as e:
            summary.record_failure(f"{media.name}: {e}")
            self.reporter.error(f"Failed: {media.name} - {e}")
            return

        if written:
            summary.processed += 1
        else:
            summary.skipped += 1

    def _execute(self, job: ConversionJob) -> bool:
        """Dispatch a job to its processor. Returns False on a soft skip."""
        convert_cfg = self.config.convert

        if job.action == JobAction.COPY:
            process_image(job.media.path, job.output_path, self.toolchain, self.reporter)
            return True

        if job.action == JobAction.REMUX:
            return process_video(job.media.path, job.output_path, self.toolchain, convert_cfg, self.reporter)

        if job.action == JobAction.TRANSCODE:
            process_legacy_video(job.media.path, job.output_path, self.toolchain, convert_cfg, self.reporter)
            return True

        raise ValueError(f"Unexpected job action: {job.action.value}")

    def _repair_existing_image(self, output_path: Path) -> None:
        """Re-verify dates on an image placed by an earlier, possibly partial, run."""
        try:
            fix_dates_on_photo(output_path, self.toolchain.exiftool)
        except ToolError as e:
            self.reporter.warn(f"Could not repair dates on existing {output_path.name}: {e}")


def run_conversion(
    paths: list[str | Path],
    cwd: Path | None = None,
    output: Path | None = None,
    config: AppConfig | None = None,
    reporter: Reporter | None = None,
) -> RunSummary:
    """
    Convert a directory or a set of files for the Pixel gallery.

    Usage errors are raised before any tool runs; a missing tool aborts before
    any file is touched.

    Raises:
        UsageError: invalid paths
        MissingToolsError: ffmpeg, ffprobe or exiftool not available
    """
    config = config or AppConfig()
    reporter = reporter or Reporter(config.output.mode)

    plan = create_conversion_plan(paths, cwd=cwd, output=output, output_suffix=config.convert.output_suffix)

    reporter.blank()
    if plan.mode == PlanMode.FILES:
        reporter.warn("NOTE: For better organization, please provide a directory instead of individual files.")
        reporter.blank()
    reporter.rule()
    if plan.mode == PlanMode.DIRECTORY:
        reporter.info(f"SOURCE:      {plan.source}")
    else:
        reporter.info(f"SOURCE:      {len(plan.jobs)} file(s)")
    reporter.info(f"DESTINATION: {plan.output_dir or 'next to each source file'}")
    reporter.info("MODE:        ARCHIVAL (Preserve HDR & HEIC)")
    reporter.rule()
    reporter.blank()

    toolchain = validate_tools(config.tools)

    runner = SequentialRunner(toolchain, config, reporter)
    summary = runner.run(plan)

    reporter.blank()
    reporter.rule()
    message = f"DONE. Processed {summary.processed} files, skipped {summary.skipped}."
    if summary.failed:
        message = f"{message} Failed {summary.failed}."
    reporter.summary(message, summary.counts())
    if plan.output_dir is not None:
        reporter.info(f"Transfer this folder to your Pixel: {plan.output_dir}")
    reporter.rule()
    reporter.blank()

    return summary
