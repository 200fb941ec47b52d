"""
Exception hierarchy for iPhone to Pixel.

Usage and environment errors abort a run before any file is touched.
ToolError is raised per file and handled by the runners.
"""


class ConversionError(Exception):
    """Base exception for all iPhone to Pixel errors."""


class UsageError(ConversionError):
    """Raised when the given paths cannot be turned into a run."""


class MissingToolsError(ConversionError):
    """Raised when required external tools are not installed."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Required tools not found: {', '.join(self.missing)}")


class ToolError(ConversionError):
    """Raised when an external tool exits with a non-zero status."""

    def __init__(self, tool: str, returncode: int, stderr: str = ""):
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr
        message = f"{tool} failed with exit code {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()[-300:]}"
        super().__init__(message)

    @property
    def unsupported_format(self) -> bool:
        """Whether exiftool refused to write this file type."""
        return "not yet supported" in self.stderr or "not supported" in self.stderr
