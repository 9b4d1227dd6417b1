"""Exception hierarchy raised at the public boundary."""

from __future__ import annotations


class LogConsoleError(Exception):
    """Base class for errors raised by lib_log_console."""


class UnknownKindError(LogConsoleError, AttributeError):
    """Raised when a log kind that is not configured is requested."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown log kind: {kind!r}")
        self.kind = kind


class PromptUnavailableError(LogConsoleError, RuntimeError):
    """Raised when prompting without a configured prompt collaborator."""


class PromptCancelledError(LogConsoleError):
    """Raised by the ``"reject"`` cancellation policy."""

    def __init__(self, message: str = "Prompt cancelled.") -> None:
        super().__init__(message)


__all__ = ["LogConsoleError", "PromptCancelledError", "PromptUnavailableError", "UnknownKindError"]
