"""Main entry point for Taskboard CLI."""

import typer

from taskboard_cli import __version__
from taskboard_cli.commands import auth, categories, config, subtasks, todos
from taskboard_cli.commands.common import OutputChoice, StatusChoice
from taskboard_cli.commands.decorators import command_wrapper
from taskboard_cli.config import get_config_manager
from taskboard_cli.utils.typer_helpers import SuggestingGroup
from taskboard_cli.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="taskboard",
    cls=SuggestingGroup,
    help="A kanban board for your todos, in the terminal",
    no_args_is_help=True,
)

console = get_console()


# Add subcommands
app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(todos.app, name="todos", help="Todo management commands")
app.add_typer(categories.app, name="categories", help="Category management commands")
app.add_typer(subtasks.app, name="subtasks", help="Subtask commands")
app.add_typer(config.app, name="config", help="Configuration management")


# Add top-level commands
@app.command()
@command_wrapper
def version() -> None:
    """Show version information and the configured endpoint."""
    console.print(f"[bold]Taskboard CLI[/bold] version [cyan]{__version__}[/cyan]")
    endpoint = get_config_manager("default").get("api.endpoint")
    console.print(f"[dim]Endpoint: {endpoint}[/dim]")


@app.command()
def board(
    status: StatusChoice | None = typer.Option(
        None, "--status", "-s", help="Only show one column"
    ),
    output: OutputChoice = typer.Option(
        OutputChoice.pretty, "--output", "-o", help="Output format"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show the board."""
    # Delegate to todos command
    todos.list_todos(status=status, output=output, profile=profile)


@app.command()
def login(
    email: str = typer.Option(..., "--email", "-e", prompt="Email", help="Email address"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt="Senha", hide_input=True, help="Password"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Sign in."""
    auth.login(email=email, password=password, profile=profile)


@app.command()
def logout(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Sign out."""
    auth.logout(profile=profile)


# Main entry point
def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
