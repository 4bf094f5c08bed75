"""Category management commands."""

from typing import Optional

import typer

from taskboard_cli.models import DEFAULT_CATEGORY_COLOR, CategoryCreate, CategoryUpdate
from taskboard_cli.services.board_service import open_board
from taskboard_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskboard_cli.utils.typer_helpers import SuggestingGroup
from taskboard_cli.utils.ui.formatters import format_categories, format_error, format_output

from .common import OutputChoice, exit_on_failure, resolve_category
from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Category management commands")


@app.command("list")
@command_wrapper
async def list_categories(
    search: Optional[str] = typer.Option(None, "--search", help="Filter by name"),
    output: OutputChoice = typer.Option(
        OutputChoice.pretty, "--output", "-o", help="Output format"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """List categories."""
    async with open_board(profile) as board:
        categories = board.categories
        if search:
            search_lower = search.lower()
            categories = [c for c in categories if search_lower in c.name.lower()]

        if output is OutputChoice.pretty:
            format_categories(categories)
        else:
            format_output(
                {"categories": [c.model_dump(mode="json") for c in categories]},
                output.value,
            )


@app.command("add")
@command_wrapper
async def add_category(
    name: str = typer.Argument(..., help="Category name"),
    color: str = typer.Option(
        DEFAULT_CATEGORY_COLOR, "--color", help="Hex color, e.g. #17C964"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Create a category."""
    async with open_board(profile) as board:
        exit_on_failure(await board.create_category(CategoryCreate(name=name, color=color)))


@app.command("edit")
@command_wrapper
async def edit_category(
    category: str = typer.Argument(..., help="Category name or ID"),
    name: Optional[str] = typer.Option(None, "--name", help="New name"),
    color: Optional[str] = typer.Option(None, "--color", help="New hex color"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Rename or recolor a category."""
    if not any([name, color]):
        format_error("No updates specified")
        raise typer.Exit(ERROR_INVALID_ARGS)

    async with open_board(profile) as board:
        current = resolve_category(board, category)
        patch = CategoryUpdate.from_category(current, name=name, color=color)
        exit_on_failure(await board.update_category(current.id, patch))


@app.command("delete")
@command_wrapper
async def delete_category(
    category: str = typer.Argument(..., help="Category name or ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Delete a category. Its todos stay, without a category."""
    async with open_board(profile) as board:
        current = resolve_category(board, category)
        if not yes:
            confirm = typer.confirm(f'Delete category "{current.name}"?')
            if not confirm:
                format_error("Cancelled")
                raise typer.Exit(0)
        exit_on_failure(await board.delete_category(current.id))
