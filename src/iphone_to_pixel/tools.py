"""
Tools module - Locate and run the external tools (ffmpeg, ffprobe, exiftool).

All media work is delegated to these tools. Each call blocks until the tool
exits; there are no timeouts, a hung transcoder hangs the run.
"""

import logging
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .config import ToolsConfig
from .constants import REQUIRED_TOOLS
from .exceptions import MissingToolsError, ToolError

logger = logging.getLogger(__name__)

INSTALL_HINTS = {
    "ffmpeg": "brew install ffmpeg  (Debian/Ubuntu: sudo apt install ffmpeg)",
    "ffprobe": "brew install ffmpeg  (Debian/Ubuntu: sudo apt install ffmpeg)",
    "exiftool": "brew install exiftool  (Debian/Ubuntu: sudo apt install libimage-exiftool-perl)",
}


@dataclass(frozen=True)
class Toolchain:
    """Executables used for probing, transcoding and metadata editing."""

    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"
    exiftool: str = "exiftool"


def get_tool_path(tool_name: str, override: Path | None = None) -> Path | None:
    """
    Find a tool.

    Search order:
    1. Configured override (if it exists)
    2. System PATH
    """
    if override is not None and override.exists():
        return override

    sys_path = shutil.which(tool_name)
    if sys_path:
        return Path(sys_path)

    return None


def check_tools_status(config: ToolsConfig | None = None) -> dict[str, Path | None]:
    """
    Check status of all required tools.

    Returns:
        Dict mapping tool name to path (None if not found)
    """
    config = config or ToolsConfig()
    return {tool: get_tool_path(tool, getattr(config, tool)) for tool in REQUIRED_TOOLS}


def validate_tools(config: ToolsConfig | None = None) -> Toolchain:
    """
    Ensure every required tool is available.

    Raises:
        MissingToolsError: naming each tool that could not be found
    """
    status = check_tools_status(config)
    missing = [tool for tool, path in status.items() if path is None]
    if missing:
        raise MissingToolsError(missing)
    return Toolchain(**{tool: str(path) for tool, path in status.items()})


def run_tool(cmd: list[str], check: bool = True) -> subprocess.CompletedProcess:
    """
    Run a tool to completion and capture its output.

    Raises:
        ToolError: if check is set and the tool exits non-zero
    """
    logger.debug(f"Running: {' '.join(cmd)}")
    result = subprocess.run(cmd, capture_output=True, text=True)
    if check and result.returncode != 0:
        raise ToolError(Path(cmd[0]).name, result.returncode, result.stderr or "")
    return result


def stream_tool(cmd: list[str], on_line: Callable[[str], None] | None = None) -> None:
    """
    Run a long tool invocation, forwarding its stderr line by line.

    Text mode translates the carriage returns ffmpeg uses for progress updates
    into line breaks, so each update is delivered as it arrives.

    Raises:
        ToolError: if the tool exits non-zero
    """
    logger.debug(f"Running: {' '.join(cmd)}")
    tail: list[str] = []
    with subprocess.Popen(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
        text=True,
        bufsize=1,
    ) as proc:
        for raw_line in proc.stderr:
            line = raw_line.rstrip()
            if not line:
                continue
            tail = (tail + [line])[-10:]
            if on_line:
                on_line(line)
        returncode = proc.wait()

    if returncode != 0:
        raise ToolError(Path(cmd[0]).name, returncode, "\n".join(tail))
