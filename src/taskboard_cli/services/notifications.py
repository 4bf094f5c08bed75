"""Transient user notifications (success / error)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from taskboard_cli.utils.ui.formatters import format_error, format_success


class Severity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notifier(ABC):
    """Fire-and-forget sink for messages shown to the user.

    Implementations must not raise: a notification never changes the
    outcome of the action that emitted it.
    """

    @abstractmethod
    def notify(self, severity: Severity, message: str) -> None:
        raise NotImplementedError("Notifier.notify() must be implemented")

    def success(self, message: str) -> None:
        self.notify(Severity.SUCCESS, message)

    def error(self, message: str) -> None:
        self.notify(Severity.ERROR, message)


class ConsoleNotifier(Notifier):
    """Print notifications through the shared rich console."""

    def notify(self, severity: Severity, message: str) -> None:
        if severity is Severity.ERROR:
            format_error(message)
        else:
            format_success(message)


class RecordingNotifier(Notifier):
    """Keep notifications in memory, e.g. to assert on them or replay later."""

    def __init__(self) -> None:
        self.messages: list[tuple[Severity, str]] = []

    def notify(self, severity: Severity, message: str) -> None:
        self.messages.append((severity, message))

    @property
    def errors(self) -> list[str]:
        return [m for s, m in self.messages if s is Severity.ERROR]

    @property
    def successes(self) -> list[str]:
        return [m for s, m in self.messages if s is Severity.SUCCESS]
