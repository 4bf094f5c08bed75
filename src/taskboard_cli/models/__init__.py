"""Taskboard CLI domain models.

This package contains Pydantic models that represent the records kept in the
remote store (todos, categories, subtasks) and the signed-in user.
"""

from .core import (
    DEFAULT_CATEGORY_COLOR,
    PRIORITY_COLORS,
    PRIORITY_LABELS,
    STATUS_LABELS,
    STATUS_ORDER,
    Category,
    CategoryCreate,
    CategoryUpdate,
    Subtask,
    SubtaskCreate,
    SubtaskUpdate,
    Todo,
    TodoCreate,
    TodoPriority,
    TodoStatus,
    TodoUpdate,
    User,
    to_timestamp,
)

__all__ = [
    # Todo models
    "Todo",
    "TodoCreate",
    "TodoUpdate",
    "TodoStatus",
    "TodoPriority",
    # Category models
    "Category",
    "CategoryCreate",
    "CategoryUpdate",
    # Subtask models
    "Subtask",
    "SubtaskCreate",
    "SubtaskUpdate",
    # User model
    "User",
    # Labels and ordering
    "STATUS_ORDER",
    "STATUS_LABELS",
    "PRIORITY_LABELS",
    "PRIORITY_COLORS",
    "DEFAULT_CATEGORY_COLOR",
    "to_timestamp",
]
