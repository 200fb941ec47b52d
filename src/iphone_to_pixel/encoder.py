"""
Encoder module - ffmpeg command construction for Pixel-compatible MP4s.

Two strategies:
- Remux (modern containers): video is always stream-copied so HDR / Dolby
  Vision metadata survives; only non-AAC audio is re-encoded.
- Legacy transcode (MPEG-1/2): full H.264 + AAC encode.
"""

from pathlib import Path

from .config import ConvertConfig
from .prober import CodecProfile

# Container tags players expect; ffmpeg defaults HEVC to hev1, which Apple rejects
VIDEO_TAGS = {
    "hevc": "hvc1",
    "h264": "avc1",
}


def get_video_tag(video_codec: str) -> str | None:
    """Container tag for a stream-copied video codec (None = leave untagged)."""
    return VIDEO_TAGS.get(video_codec)


def build_video_flags(codecs: CodecProfile) -> list[str]:
    """Video is never re-encoded."""
    flags = ["-c:v", "copy"]
    tag = get_video_tag(codecs.video)
    if tag:
        flags.extend(["-tag:v", tag])
    return flags


def build_audio_flags(codecs: CodecProfile, audio_bitrate: str) -> list[str]:
    """Copy AAC as-is, convert anything else to AAC."""
    if codecs.has_aac_audio:
        return ["-c:a", "copy"]
    return ["-c:a", "aac", "-b:a", audio_bitrate]


def _base_command(ffmpeg: str, input_path: Path) -> list[str]:
    # -stats keeps progress on stderr while -v error hides the banner
    return [ffmpeg, "-nostdin", "-v", "error", "-stats", "-i", str(input_path)]


def build_remux_command(
    input_path: Path,
    output_path: Path,
    codecs: CodecProfile,
    config: ConvertConfig | None = None,
    ffmpeg: str = "ffmpeg",
) -> list[str]:
    """Build ffmpeg command for an HDR-preserving remux to MP4."""
    config = config or ConvertConfig()
    cmd = _base_command(ffmpeg, input_path)

    cmd.extend(build_video_flags(codecs))
    cmd.extend(build_audio_flags(codecs, config.audio_bitrate))

    # Drop data streams, index at the front, keep container metadata
    cmd.extend(["-dn", "-movflags", "+faststart", "-map_metadata", "0"])

    cmd.append(str(output_path))
    return cmd


def build_legacy_command(
    input_path: Path,
    output_path: Path,
    config: ConvertConfig | None = None,
    ffmpeg: str = "ffmpeg",
) -> list[str]:
    """Build ffmpeg command for a full H.264/AAC transcode of a legacy file."""
    config = config or ConvertConfig()
    cmd = _base_command(ffmpeg, input_path)

    # 8-bit H.264, near-lossless quality
    cmd.extend(["-c:v", "libx264", "-pix_fmt", "yuv420p"])
    cmd.extend(["-preset", config.legacy_preset, "-crf", str(config.legacy_crf)])

    cmd.extend(["-c:a", "aac", "-b:a", config.audio_bitrate])

    cmd.extend(["-movflags", "+faststart", "-map_metadata", "0"])

    cmd.append(str(output_path))
    return cmd
