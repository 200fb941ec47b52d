"""Legacy video processor - Full H.264/AAC transcode for MPEG-1/2 files."""

from pathlib import Path

from ..config import ConvertConfig
from ..dates import copy_dates_from_source
from ..encoder import build_legacy_command
from ..reporter import Reporter
from ..tools import Toolchain, stream_tool
from .video import remove_partial_output


def process_legacy_video(
    input_path: Path,
    output_path: Path,
    toolchain: Toolchain | None = None,
    config: ConvertConfig | None = None,
    reporter: Reporter | None = None,
) -> None:
    """
    Transcode an interlaced/legacy MPEG file to H.264 MP4.

    Stream copy is never attempted: MPEG-1/2 streams do not play in modern
    galleries.

    Raises:
        ToolError: if ffmpeg or exiftool fails (the partial output is removed)
    """
    toolchain = toolchain or Toolchain()
    config = config or ConvertConfig()
    reporter = reporter or Reporter()

    reporter.log(f"LEGACY VIDEO: {input_path.name} -> MP4 (Transcoding to H.264/AAC)")

    cmd = build_legacy_command(input_path, output_path, config, toolchain.ffmpeg)
    try:
        stream_tool(cmd, reporter.progress)
        copy_dates_from_source(input_path, output_path, toolchain.exiftool)
    except Exception:
        reporter.error(f"ERROR: Failed to convert {input_path.name}")
        remove_partial_output(output_path)
        raise
