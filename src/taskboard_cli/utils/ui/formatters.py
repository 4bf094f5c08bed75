"""Output formatters for the board, todos and categories."""

import json
from datetime import datetime
from typing import Any

import yaml
from rich.columns import Columns
from rich.errors import StyleSyntaxError
from rich.markup import escape
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from taskboard_cli.models import (
    PRIORITY_COLORS,
    PRIORITY_LABELS,
    STATUS_LABELS,
    STATUS_ORDER,
    Category,
    Todo,
)
from taskboard_cli.utils.task_helpers import calculate_unique_suffixes
from taskboard_cli.utils.ui.console import get_console

console = get_console()

STATUS_STYLES = {
    "pending": "white",
    "in_progress": "yellow",
    "completed": "green",
}


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format machine-readable output; ``pretty`` is handled by the caller."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    else:
        format_single_item(data) if isinstance(data, dict) else console.print(data)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        formatted_key = key.replace("_", " ").title()
        if isinstance(value, list):
            formatted_value = ", ".join(str(v) for v in value)
        elif value is None:
            formatted_value = "-"
        else:
            formatted_value = str(value)
        table.add_row(formatted_key, formatted_value)

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")


def format_due_date(value: datetime | None) -> str:
    """Format a due date as DD/MM/YYYY, the way the board shows it."""
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")


def _short_id(item_id: str, suffixes: dict[str, int]) -> str:
    length = suffixes.get(item_id)
    return item_id[-length:] if length else item_id


def priority_chip(priority: str) -> Text:
    """Colored priority label (Baixa / Média / Alta)."""
    return Text(
        f" {PRIORITY_LABELS[priority]} ",
        style=f"bold white on {PRIORITY_COLORS[priority]}",
    )


def category_chip(category: Category | None) -> Text:
    """Colored category label; empty when the todo has no category."""
    if category is None:
        return Text("")
    try:
        style = Style.parse(f"white on {category.color}")
    except StyleSyntaxError:
        style = Style.parse("reverse")
    return Text(f" {category.name} ", style=style)


def render_todo_card(todo: Todo, suffixes: dict[str, int] | None = None) -> Panel:
    """Render one todo as a card for its board column."""
    suffixes = suffixes or {}
    body = Text()
    if todo.description:
        body.append(f"{todo.description}\n", style="dim")

    for subtask in todo.subtasks:
        done = subtask.status == "completed"
        mark = "☑" if done else "☐"
        style = "strike dim" if done else ""
        body.append(f"{mark} ", style="cyan")
        body.append(subtask.title, style=style)
        body.append(f"  [{_short_id(subtask.id, suffixes)}]\n", style="dim")

    chips = Text()
    if todo.category is not None:
        chips.append_text(category_chip(todo.category))
        chips.append(" ")
    chips.append_text(priority_chip(todo.priority))
    if todo.due_date:
        chips.append(" ")
        chips.append(f" {format_due_date(todo.due_date)} ", style="white on #006FEE")
    body.append_text(chips)

    return Panel(
        body,
        title=f"[bold]{escape(todo.title)}[/bold]",
        subtitle=f"[dim]{_short_id(todo.id, suffixes)}[/dim]",
        border_style=STATUS_STYLES[todo.status],
        expand=True,
    )


def format_board(columns: dict[str, list[Todo]]) -> None:
    """Render the three status columns side by side."""
    all_ids = [todo.id for status in STATUS_ORDER for todo in columns.get(status, [])]
    all_ids += [
        subtask.id
        for status in STATUS_ORDER
        for todo in columns.get(status, [])
        for subtask in todo.subtasks
    ]
    suffixes = calculate_unique_suffixes(all_ids)

    table = Table(show_header=True, header_style="bold magenta", expand=True)
    for status in STATUS_ORDER:
        count = len(columns.get(status, []))
        table.add_column(
            f"{STATUS_LABELS[status]} ({count})",
            style=STATUS_STYLES[status],
            ratio=1,
        )

    cells = []
    for status in STATUS_ORDER:
        cards = [render_todo_card(todo, suffixes) for todo in columns.get(status, [])]
        cells.append(Columns(cards, expand=True) if cards else Text("-", style="dim"))
    table.add_row(*cells)

    console.print(table)


def format_todo_detail(todo: Todo) -> None:
    """Show every field of one todo."""
    console.print(render_todo_card(todo))
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("ID", todo.id)
    table.add_row("Status", STATUS_LABELS[todo.status])
    table.add_row("Priority", PRIORITY_LABELS[todo.priority])
    table.add_row("Due", format_due_date(todo.due_date) or "-")
    table.add_row("Category", todo.category.name if todo.category else "-")
    for subtask in todo.subtasks:
        table.add_row(
            f"Subtask {subtask.id}",
            f"{subtask.title} ({STATUS_LABELS[subtask.status]})",
        )
    console.print(table)


def format_categories(categories: list[Category]) -> None:
    """List categories with their color swatch."""
    if not categories:
        console.print("[yellow]No categories found[/yellow]")
        return

    suffixes = calculate_unique_suffixes([c.id for c in categories])
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Color")
    for category in categories:
        table.add_row(
            _short_id(category.id, suffixes),
            category_chip(category),
            category.color,
        )
    console.print(table)
