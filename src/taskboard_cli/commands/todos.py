"""Todo management commands."""

from typing import Optional

import typer

from taskboard_cli.models import STATUS_ORDER, TodoCreate, TodoUpdate
from taskboard_cli.services.board_service import open_board
from taskboard_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskboard_cli.utils.typer_helpers import SuggestingGroup
from taskboard_cli.utils.ui.formatters import (
    format_board,
    format_error,
    format_output,
    format_todo_detail,
)

from .common import (
    OutputChoice,
    PriorityChoice,
    StatusChoice,
    exit_on_failure,
    parse_due_date,
    resolve_category,
    resolve_todo,
)
from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Todo management commands")


@app.command("list")
@command_wrapper
async def list_todos(
    status: Optional[StatusChoice] = typer.Option(
        None, "--status", "-s", help="Only show one column"
    ),
    output: OutputChoice = typer.Option(
        OutputChoice.pretty, "--output", "-o", help="Output format"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show the board: one column per status, newest first."""
    async with open_board(profile) as board:
        columns = board.columns_by_status()
        if status is not None:
            columns = {s: (todos if s == status.value else []) for s, todos in columns.items()}

        if output is OutputChoice.pretty:
            format_board(columns)
        else:
            format_output(
                {
                    s: [todo.model_dump(mode="json") for todo in columns[s]]
                    for s in STATUS_ORDER
                },
                output.value,
            )


@app.command("show")
@command_wrapper
async def show_todo(
    todo_id: str = typer.Argument(..., help="Todo ID or suffix"),
    output: OutputChoice = typer.Option(
        OutputChoice.pretty, "--output", "-o", help="Output format"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show one todo with its subtasks."""
    async with open_board(profile) as board:
        todo = resolve_todo(board, todo_id)
        if output is OutputChoice.pretty:
            format_todo_detail(todo)
        else:
            format_output(todo.model_dump(mode="json"), output.value)


@app.command("add")
@command_wrapper
async def add_todo(
    title: str = typer.Argument(..., help="Todo title"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="Details"
    ),
    status: StatusChoice = typer.Option(
        StatusChoice.pending, "--status", "-s", help="Initial column"
    ),
    due: Optional[str] = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    priority: PriorityChoice = typer.Option(
        PriorityChoice.medium, "--priority", "-p", help="Priority"
    ),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Category name or ID"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Create a todo."""
    due_date = parse_due_date(due)
    async with open_board(profile) as board:
        category_id = resolve_category(board, category).id if category else None
        draft = TodoCreate(
            title=title,
            description=description,
            status=status.value,
            due_date=due_date,
            priority=priority.value,
            category_id=category_id,
        )
        exit_on_failure(await board.create_todo(draft))


@app.command("edit")
@command_wrapper
async def edit_todo(
    todo_id: str = typer.Argument(..., help="Todo ID or suffix"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(
        None, "--description", "-d", help="New details"
    ),
    status: Optional[StatusChoice] = typer.Option(
        None, "--status", "-s", help="New column"
    ),
    due: Optional[str] = typer.Option(None, "--due", help="New due date (YYYY-MM-DD)"),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
    priority: Optional[PriorityChoice] = typer.Option(
        None, "--priority", "-p", help="New priority"
    ),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Category name or ID"
    ),
    no_category: bool = typer.Option(
        False, "--no-category", help="Remove the category"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Edit a todo. Every field is saved again, changed or not."""
    if due and clear_due:
        raise AppError("Use either --due or --clear-due", ERROR_INVALID_ARGS)
    if category and no_category:
        raise AppError("Use either --category or --no-category", ERROR_INVALID_ARGS)

    changes: dict = {}
    if title is not None:
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    if status is not None:
        changes["status"] = status.value
    if priority is not None:
        changes["priority"] = priority.value
    if due:
        changes["due_date"] = parse_due_date(due)
    if clear_due:
        changes["due_date"] = None
    if no_category:
        changes["category_id"] = None

    if not changes and not category:
        format_error("No updates specified")
        raise typer.Exit(ERROR_INVALID_ARGS)

    async with open_board(profile) as board:
        todo = resolve_todo(board, todo_id)
        if category:
            changes["category_id"] = resolve_category(board, category).id

        board.context.editing_todo_id = todo.id
        exit_on_failure(
            await board.update_todo(todo.id, TodoUpdate.from_todo(todo, **changes))
        )


@app.command("delete")
@command_wrapper
async def delete_todo(
    todo_id: str = typer.Argument(..., help="Todo ID or suffix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Delete a todo and its subtasks."""
    async with open_board(profile) as board:
        todo = resolve_todo(board, todo_id)
        if not yes:
            confirm = typer.confirm(f'Delete "{todo.title}"?')
            if not confirm:
                format_error("Cancelled")
                raise typer.Exit(0)
        exit_on_failure(await board.delete_todo(todo.id))


@app.command("move")
@command_wrapper
async def move_todo(
    todo_id: str = typer.Argument(..., help="Todo ID or suffix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Move a todo to the next column (Feito wraps to Aberto)."""
    async with open_board(profile) as board:
        todo = resolve_todo(board, todo_id)
        exit_on_failure(await board.advance_status(todo.id))


@app.command("back")
@command_wrapper
async def move_todo_back(
    todo_id: str = typer.Argument(..., help="Todo ID or suffix"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Move a todo to the previous column (Aberto wraps to Feito)."""
    async with open_board(profile) as board:
        todo = resolve_todo(board, todo_id)
        exit_on_failure(await board.regress_status(todo.id))


@app.command("status")
@command_wrapper
async def set_status(
    todo_id: str = typer.Argument(..., help="Todo ID or suffix"),
    status: StatusChoice = typer.Argument(..., help="Target column"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Put a todo in a given column."""
    async with open_board(profile) as board:
        todo = resolve_todo(board, todo_id)
        exit_on_failure(await board.change_status(todo.id, status.value))
