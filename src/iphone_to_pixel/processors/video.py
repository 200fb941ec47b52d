"""Video processor - HDR-preserving remux to MP4 with selective audio transcode."""

import logging
from pathlib import Path

from ..config import ConvertConfig
from ..dates import copy_dates_from_source
from ..encoder import build_remux_command
from ..prober import probe_codecs
from ..reporter import Reporter
from ..tools import Toolchain, stream_tool

logger = logging.getLogger(__name__)


def remove_partial_output(output_path: Path) -> None:
    """Delete a half-written output so no truncated file is left behind."""
    try:
        output_path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove partial output {output_path}: {e}")


def process_video(
    input_path: Path,
    output_path: Path,
    toolchain: Toolchain | None = None,
    config: ConvertConfig | None = None,
    reporter: Reporter | None = None,
) -> bool:
    """
    Remux a MOV/MP4/M4V into a Pixel-friendly MP4.

    Steps:
    1. Probe video and audio codecs
    2. Skip unreadable videos (nothing is written)
    3. Stream-copy video, tagging HEVC as hvc1 and H.264 as avc1
    4. Copy AAC audio, convert anything else to AAC
    5. Copy the capture date from the source

    Returns:
        True if the output was written, False if the file was skipped

    Raises:
        ToolError: if ffmpeg or exiftool fails (the partial output is removed)
    """
    toolchain = toolchain or Toolchain()
    config = config or ConvertConfig()
    reporter = reporter or Reporter()

    codecs = probe_codecs(input_path, toolchain.ffprobe)
    if not codecs.is_readable:
        reporter.warn(f"SKIP: Unreadable video {input_path.name}")
        return False

    audio_type = "COPY" if codecs.has_aac_audio else "CONVERT"
    reporter.log(f"VIDEO: {input_path.name} [{codecs.video}] -> MP4 (HDR Preserved) [Audio:{audio_type}]")

    cmd = build_remux_command(input_path, output_path, codecs, config, toolchain.ffmpeg)
    try:
        stream_tool(cmd, reporter.progress)
        copy_dates_from_source(input_path, output_path, toolchain.exiftool)
    except Exception:
        reporter.error(f"ERROR: Failed to convert {input_path.name}")
        remove_partial_output(output_path)
        raise

    return True
