"""Subtask commands."""

from typing import Optional

import typer

from taskboard_cli.models import SubtaskCreate
from taskboard_cli.services.board_service import open_board
from taskboard_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskboard_cli.utils.typer_helpers import SuggestingGroup
from taskboard_cli.utils.ui.formatters import format_error

from .common import StatusChoice, exit_on_failure, resolve_subtask, resolve_todo
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Subtask commands")


@app.command("add")
@command_wrapper
async def add_subtask(
    todo_id: str = typer.Argument(..., help="Parent todo ID or suffix"),
    title: str = typer.Argument(..., help="Subtask title"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="Details"
    ),
    status: StatusChoice = typer.Option(
        StatusChoice.pending, "--status", "-s", help="Initial status"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Add a subtask to a todo."""
    async with open_board(profile) as board:
        todo = resolve_todo(board, todo_id)
        draft = SubtaskCreate(title=title, description=description, status=status.value)
        exit_on_failure(await board.create_subtask(todo.id, draft))


@app.command("edit")
@command_wrapper
async def edit_subtask(
    subtask_id: str = typer.Argument(..., help="Subtask ID or suffix"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="New details"
    ),
    status: Optional[StatusChoice] = typer.Option(
        None, "--status", "-s", help="New status"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Edit a subtask (title, description and status are saved together)."""
    changes = {
        key: value
        for key, value in (
            ("title", title),
            ("description", description),
            ("status", status.value if status else None),
        )
        if value is not None
    }
    if not changes:
        format_error("No updates specified")
        raise typer.Exit(ERROR_INVALID_ARGS)

    async with open_board(profile) as board:
        subtask = resolve_subtask(board, subtask_id)
        exit_on_failure(await board.update_subtask(subtask.model_copy(update=changes)))


@app.command("delete")
@command_wrapper
async def delete_subtask(
    subtask_id: str = typer.Argument(..., help="Subtask ID or suffix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Delete a subtask."""
    async with open_board(profile) as board:
        subtask = resolve_subtask(board, subtask_id)
        exit_on_failure(await board.delete_subtask(subtask.id))


@app.command("toggle")
@command_wrapper
async def toggle_subtask(
    subtask_id: str = typer.Argument(..., help="Subtask ID or suffix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Tick or untick a subtask."""
    async with open_board(profile) as board:
        subtask = resolve_subtask(board, subtask_id)
        exit_on_failure(await board.toggle_subtask_completion(subtask))
