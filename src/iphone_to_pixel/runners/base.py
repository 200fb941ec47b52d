"""Base runner classes."""

from dataclasses import dataclass, field


@dataclass
class RunSummary:
    """
    Counters for one invocation.

    The final values are the only contract toward the caller: they are printed
    (or streamed as a JSON summary event) and decide the exit code.
    """

    processed: int = 0
    skipped: int = 0
    fixed: int = 0
    already_ok: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def record_failure(self, message: str) -> None:
        self.failed += 1
        self.errors.append(message)

    def counts(self) -> dict[str, int]:
        return {
            "processed": self.processed,
            "skipped": self.skipped,
            "fixed": self.fixed,
            "already_ok": self.already_ok,
            "failed": self.failed,
        }

    def exit_code(self, fail_on_error: bool = True) -> int:
        """Non-zero when any file failed and the policy asks for it."""
        return 1 if fail_on_error and self.failed > 0 else 0
