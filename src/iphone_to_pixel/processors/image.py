"""Image processor - Bit-for-bit copy plus filesystem date repair."""

import shutil
from pathlib import Path

from ..dates import fix_dates_on_photo
from ..reporter import Reporter
from ..tools import Toolchain
from .video import remove_partial_output


def process_image(
    input_path: Path,
    output_path: Path,
    toolchain: Toolchain | None = None,
    reporter: Reporter | None = None,
) -> None:
    """
    Copy a photo exactly and align its file dates with its capture date.

    No re-encoding happens, so HEIC and HDR gain maps are preserved. The date
    repair keeps galleries from sorting the copy by today's date.

    Args:
        input_path: Existing image file
        output_path: Destination (never the input itself)
        toolchain: External tool executables
        reporter: Progress output

    Raises:
        OSError, ToolError: if the copy or the date repair fails (the partial
        output is removed so the next run retries the file)
    """
    toolchain = toolchain or Toolchain()
    reporter = reporter or Reporter()

    reporter.log(f"PHOTO: {input_path.name} -> Copying (Bit-for-bit)...")

    try:
        shutil.copy2(input_path, output_path)
        fix_dates_on_photo(output_path, toolchain.exiftool)
    except Exception:
        reporter.error(f"ERROR: Failed to copy {input_path.name}")
        remove_partial_output(output_path)
        raise
