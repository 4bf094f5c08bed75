"""Repository interfaces for the remote store."""

from .repository import CategoryRepository, SubtaskRepository, TodoRepository

__all__ = [
    "TodoRepository",
    "CategoryRepository",
    "SubtaskRepository",
]
