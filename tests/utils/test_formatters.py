"""Tests for board and todo output formatters."""

import json
from datetime import datetime

from rich.console import Console

from taskboard_cli.models import Category, Subtask, Todo
from taskboard_cli.services.board_service import partition_by_status
from taskboard_cli.utils.ui import formatters


def _capture(monkeypatch) -> Console:
    console = Console(record=True, width=160, color_system=None)
    monkeypatch.setattr(formatters, "console", console)
    return console


def _todo(**fields) -> Todo:
    data = {"id": "todo-0001", "title": "Buy milk"}
    data.update(fields)
    return Todo(**data)


def test_format_due_date():
    assert formatters.format_due_date(None) == ""
    assert formatters.format_due_date(datetime(2024, 5, 1)) == "01/05/2024"


def test_priority_chip_uses_label_and_color():
    chip = formatters.priority_chip("high")
    assert chip.plain == " Alta "
    assert "#F31260" in str(chip.style)


def test_category_chip():
    assert formatters.category_chip(None).plain == ""
    chip = formatters.category_chip(Category(id="cat-1", name="Casa", color="#17C964"))
    assert chip.plain == " Casa "


def test_category_chip_with_unusable_color():
    chip = formatters.category_chip(Category(id="cat-1", name="Casa", color="#zz"))
    assert chip.plain == " Casa "


def test_format_board_shows_columns_and_cards(monkeypatch):
    console = _capture(monkeypatch)
    todos = [
        _todo(
            id="todo-0002",
            title="Pay rent",
            status="in_progress",
            priority="high",
            due_date=datetime(2024, 5, 1),
            category=Category(id="cat-1", name="Casa"),
        ),
        _todo(
            subtasks=[
                Subtask(id="sub-0003", title="check fridge", status="completed", todo_id="todo-0001")
            ]
        ),
    ]

    formatters.format_board(partition_by_status(todos))

    output = console.export_text()
    assert "Aberto (1)" in output
    assert "Fazendo (1)" in output
    assert "Feito (0)" in output
    assert "Buy milk" in output
    assert "Pay rent" in output
    assert "01/05/2024" in output
    assert "Casa" in output
    assert "Alta" in output
    assert "☑ check fridge" in output


def test_format_board_card_without_category(monkeypatch):
    console = _capture(monkeypatch)

    formatters.format_board(partition_by_status([_todo(category=None)]))

    assert "Buy milk" in console.export_text()


def test_format_todo_detail(monkeypatch):
    console = _capture(monkeypatch)

    formatters.format_todo_detail(_todo(priority="low"))

    output = console.export_text()
    assert "todo-0001" in output
    assert "Aberto" in output
    assert "Baixa" in output


def test_format_categories(monkeypatch):
    console = _capture(monkeypatch)

    formatters.format_categories([])
    formatters.format_categories([Category(id="cat-1", name="Casa", color="#17C964")])

    output = console.export_text()
    assert "No categories found" in output
    assert "Casa" in output
    assert "#17C964" in output


def test_format_output_json(capsys):
    formatters.format_output({"title": "Café"}, "json")
    assert json.loads(capsys.readouterr().out) == {"title": "Café"}


def test_format_output_yaml(capsys):
    formatters.format_output({"pending": []}, "yaml")
    assert capsys.readouterr().out.strip() == "pending: []"
