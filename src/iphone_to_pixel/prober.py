"""
Codec inspection via ffprobe.

The video and audio streams are probed independently; a failed probe yields a
sentinel ("unknown" / "none") instead of an error.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from .constants import NO_AUDIO_CODEC, UNKNOWN_VIDEO_CODEC

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CodecProfile:
    """Codec short names of a video's first video and audio streams."""

    video: str
    audio: str

    @property
    def is_readable(self) -> bool:
        return self.video != UNKNOWN_VIDEO_CODEC

    @property
    def has_aac_audio(self) -> bool:
        return self.audio == "aac"


def get_stream_codec(file_path: Path, stream_selector: str, ffprobe: str = "ffprobe") -> str:
    """
    Get the codec short name of one stream.

    Args:
        file_path: Media file to probe
        stream_selector: ffprobe stream selector, e.g. "v:0" or "a:0"
        ffprobe: ffprobe executable

    Returns:
        Codec name, or an empty string when the probe fails or finds nothing
    """
    cmd = [
        ffprobe,
        "-v",
        "error",
        "-select_streams",
        stream_selector,
        "-show_entries",
        "stream=codec_name",
        "-of",
        "default=nw=1:nk=1",
        str(file_path),
    ]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        logger.debug(f"ffprobe could not run on {file_path.name}: {e}")
        return ""

    if result.returncode != 0:
        return ""
    lines = (result.stdout or "").strip().splitlines()
    return lines[0].strip() if lines else ""


def probe_codecs(file_path: Path, ffprobe: str = "ffprobe") -> CodecProfile:
    """Probe the first video and first audio stream of a file."""
    video = get_stream_codec(file_path, "v:0", ffprobe) or UNKNOWN_VIDEO_CODEC
    audio = get_stream_codec(file_path, "a:0", ffprobe) or NO_AUDIO_CODEC
    return CodecProfile(video=video, audio=audio)
