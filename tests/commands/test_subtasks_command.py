"""Unit tests for the subtask commands."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from taskboard_cli.commands.subtasks import app

runner = CliRunner()


@pytest.fixture
def run(open_board_stub):
    def _run(args, **kwargs):
        with patch("taskboard_cli.commands.subtasks.open_board", open_board_stub):
            return runner.invoke(app, args, **kwargs)

    return _run


@pytest.fixture
def todo(store, user):
    return store.seed_todo(user.id, "Buy milk")


class TestSubtasks:
    def test_add(self, run, store, todo, notifier):
        result = run(["add", todo.id, "check fridge"])

        assert result.exit_code == 0
        (row,) = store.subtasks.values()
        assert row["todo_id"] == todo.id
        assert row["status"] == "pending"
        assert notifier.successes == ['Subtarefa "check fridge" criada com sucesso!']

    def test_add_to_unknown_todo(self, run, store):
        assert run(["add", "nope", "check fridge"]).exit_code == 5
        assert store.subtasks == {}

    def test_edit_overwrites_given_fields(self, run, store, todo):
        subtask = store.seed_subtask(todo.id, "check fridge")

        result = run(["edit", subtask.id, "--status", "in_progress"])

        assert result.exit_code == 0
        row = store.subtasks[subtask.id]
        assert row["status"] == "in_progress"
        assert row["title"] == "check fridge"

    def test_edit_without_changes(self, run, store, todo):
        subtask = store.seed_subtask(todo.id, "check fridge")
        assert run(["edit", subtask.id]).exit_code == 2

    @pytest.mark.parametrize(
        "start, expected",
        [("pending", "completed"), ("completed", "pending"), ("in_progress", "completed")],
    )
    def test_toggle(self, run, store, todo, start, expected):
        subtask = store.seed_subtask(todo.id, "check fridge", status=start)

        result = run(["toggle", subtask.id])

        assert result.exit_code == 0
        assert store.subtasks[subtask.id]["status"] == expected

    def test_delete(self, run, store, todo):
        subtask = store.seed_subtask(todo.id, "check fridge")

        assert run(["delete", subtask.id]).exit_code == 0
        assert store.subtasks == {}

    def test_toggle_failure(self, run, store, todo, notifier):
        subtask = store.seed_subtask(todo.id, "check fridge")
        store.fail_on.add("update_subtask")

        result = run(["toggle", subtask.id])

        assert result.exit_code == 4
        assert store.subtasks[subtask.id]["status"] == "pending"
        assert notifier.errors == ["Erro ao atualizar subtarefa. Tente novamente."]
