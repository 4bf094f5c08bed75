"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from rich.markup import escape
from typer.core import TyperGroup

from taskboard_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskboard_cli.utils.ui.console import get_console


def suggest_commands(attempted: str, known: list[str]) -> list[str]:
    """Up to three known command names close to ``attempted``.

    Prefix matches come first (``cat`` -> ``categories``), then fuzzy ones.
    """
    prefixed = sorted(name for name in known if name.startswith(attempted))
    fuzzy = get_close_matches(attempted, known, n=3, cutoff=0.6)
    return list(dict.fromkeys(prefixed + fuzzy))[:3]


class SuggestingGroup(TyperGroup):
    """Typer group that names the closest command on a typo."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            suggestions = suggest_commands(args[0], list(self.commands)) if args else []
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[red]Error:[/red] unknown command "{escape(args[0])}" for "{ctx.info_name}"'
            )
            console.print(f"[yellow]Did you mean:[/yellow] {', '.join(suggestions)}")
            console.print(f"[dim]Run '{ctx.command_path} --help' for all commands.[/dim]")
            raise typer.Exit(ERROR_INVALID_ARGS) from e
