"""
Processors layer - Per-file conversion pipelines.

Each processor handles exactly one input file and writes exactly one output.
Errors propagate to the runner, which counts them and moves on.
"""

from .image import process_image
from .legacy_video import process_legacy_video
from .video import process_video

__all__ = [
    "process_image",
    "process_video",
    "process_legacy_video",
]
