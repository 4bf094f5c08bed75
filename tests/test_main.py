"""Tests for the top-level taskboard app."""

from unittest.mock import patch

from typer.testing import CliRunner

from taskboard_cli import __version__
from taskboard_cli.main import app

runner = CliRunner()


def test_help_lists_command_groups():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("auth", "todos", "categories", "subtasks", "config", "board", "version"):
        assert name in result.output


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output
    assert "http://localhost:54321" in result.output


def test_board_delegates_to_todo_list(open_board_stub, store, user):
    store.seed_todo(user.id, "Buy milk")

    with patch("taskboard_cli.commands.todos.open_board", open_board_stub):
        result = runner.invoke(app, ["board"])

    assert result.exit_code == 0
    assert "Aberto (1)" in result.output
    assert "Buy milk" in result.output


def test_board_requires_login():
    result = runner.invoke(app, ["board"])
    assert result.exit_code == 3
    assert "Not logged in" in result.output


def test_typo_suggests_command():
    result = runner.invoke(app, ["todo"])
    assert result.exit_code == 2
    assert "todos" in result.output
