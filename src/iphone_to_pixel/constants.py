"""
Centralized constants for iPhone to Pixel.

Extension sets are lower-case; match against ``path.suffix.lower()``.
"""

# Still images (copied bit-for-bit)
IMAGE_EXTENSIONS = {".heic", ".heif", ".jpg", ".jpeg", ".png", ".gif", ".dng"}

# Modern containers (remuxed, video stream copied)
VIDEO_EXTENSIONS = {".mov", ".mp4", ".m4v"}

# MPEG-1/2 files (fully transcoded to H.264)
LEGACY_VIDEO_EXTENSIONS = {".mpg", ".mpeg"}

# Output container for every video path
VIDEO_OUTPUT_EXTENSION = ".mp4"

# Directory mode output: <input>_Remuxed next to the input directory
OUTPUT_DIR_SUFFIX = "_Remuxed"

# Tools that must be available before any file is touched
REQUIRED_TOOLS = ("ffmpeg", "ffprobe", "exiftool")

# Codec probe sentinels
UNKNOWN_VIDEO_CODEC = "unknown"
NO_AUDIO_CODEC = "none"

# Zero date written by malformed files; treated exactly like a missing date
ZERO_DATE_PREFIX = "0000:00:00"

# Encoding defaults
DEFAULT_AUDIO_BITRATE = "320k"
LEGACY_CRF = 18
LEGACY_PRESET = "slow"
