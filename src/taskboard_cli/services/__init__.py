"""Services module for Taskboard CLI - Business logic layer."""

from .board_service import BoardContext, BoardController, open_board
from .notifications import ConsoleNotifier, Notifier, RecordingNotifier, Severity
from .session_service import SessionService

__all__ = [
    "BoardContext",
    "BoardController",
    "open_board",
    "Notifier",
    "ConsoleNotifier",
    "RecordingNotifier",
    "Severity",
    "SessionService",
]
