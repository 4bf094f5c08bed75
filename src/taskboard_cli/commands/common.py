"""Helpers shared by the board commands."""

from datetime import datetime
from enum import Enum

import typer

from taskboard_cli.models import Category, Subtask, Todo
from taskboard_cli.services.board_service import BoardController
from taskboard_cli.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NETWORK, ERROR_NOT_FOUND
from taskboard_cli.utils.task_helpers import resolve_id

from .decorators import AppError


class StatusChoice(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class PriorityChoice(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class OutputChoice(str, Enum):
    pretty = "pretty"
    json = "json"
    yaml = "yaml"


def exit_on_failure(ok: bool) -> None:
    """The controller already notified the user; just set the exit code."""
    if not ok:
        raise typer.Exit(code=ERROR_NETWORK)


def parse_due_date(value: str | None) -> datetime | None:
    """Parse YYYY-MM-DD or a full ISO-8601 timestamp."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise AppError(
            f"Invalid due date '{value}', expected YYYY-MM-DD", ERROR_INVALID_ARGS
        ) from e


def resolve_todo(controller: BoardController, id_or_suffix: str) -> Todo:
    try:
        todo_id = resolve_id(
            controller.todos, id_or_suffix, "todo", describe=lambda t: t.title
        )
    except ValueError as e:
        raise AppError(str(e), ERROR_NOT_FOUND) from e
    return controller.find_todo(todo_id)


def resolve_subtask(controller: BoardController, id_or_suffix: str) -> Subtask:
    try:
        subtask_id = resolve_id(
            controller.subtasks, id_or_suffix, "subtask", describe=lambda s: s.title
        )
    except ValueError as e:
        raise AppError(str(e), ERROR_NOT_FOUND) from e
    return controller.find_subtask(subtask_id)


def resolve_category(controller: BoardController, name_or_id: str) -> Category:
    """Find a category by exact name (case-insensitive), full ID or ID suffix."""
    for category in controller.categories:
        if category.name.lower() == name_or_id.lower():
            return category
    try:
        category_id = resolve_id(
            controller.categories, name_or_id, "category", describe=lambda c: c.name
        )
    except ValueError as e:
        raise AppError(str(e), ERROR_NOT_FOUND) from e
    return controller.find_category(category_id)
