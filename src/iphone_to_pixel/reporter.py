"""
Reporter - User-facing progress output in text or JSON-lines form.

The output mode is chosen once when the reporter is built and handed to each
component, so nothing depends on a global switch.
"""

import json
import sys
from typing import Any, TextIO

from rich.console import Console

_STYLES = {
    "error": "red",
    "warn": "yellow",
    "info": "cyan",
    "success": "green",
    "progress": "dim",
}


class Reporter:
    """
    Emits run events.

    Text mode prints styled lines through Rich. JSON mode writes one object per
    line (``{"type": ..., "message": ...}``) for machine consumers.
    """

    def __init__(self, mode: str = "text", stream: TextIO | None = None):
        if mode not in ("text", "json"):
            raise ValueError(f"Unknown output mode: {mode}")
        self.mode = mode
        self.stream = stream or sys.stdout
        self.console = Console(file=self.stream, highlight=False, soft_wrap=True)

    @property
    def is_json(self) -> bool:
        return self.mode == "json"

    def _emit(self, event_type: str, message: str, **extra: Any) -> None:
        if self.is_json:
            payload = {"type": event_type, "message": message, **extra}
            self.stream.write(json.dumps(payload) + "\n")
            self.stream.flush()
            return

        style = _STYLES.get(event_type)
        if style:
            self.console.print(message, style=style, markup=False)
        else:
            self.console.print(message, markup=False)

    def error(self, message: str, **extra: Any) -> None:
        self._emit("error", message, **extra)

    def warn(self, message: str, **extra: Any) -> None:
        self._emit("warn", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        self._emit("info", message, **extra)

    def success(self, message: str, **extra: Any) -> None:
        self._emit("success", message, **extra)

    def log(self, message: str, **extra: Any) -> None:
        self._emit("log", message, **extra)

    def progress(self, line: str) -> None:
        """Forward one line of a running tool's progress output."""
        self._emit("progress", line)

    def rule(self) -> None:
        if not self.is_json:
            self.console.print("=" * 57)

    def blank(self) -> None:
        if not self.is_json:
            self.console.print()

    def summary(self, message: str, counts: dict[str, int]) -> None:
        """Final run summary - the only contract toward the caller."""
        if self.is_json:
            self._emit("summary", message, counts=counts)
        else:
            self.success(message)
