"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state,
plus an in-memory store behind the repository interfaces.
"""

from __future__ import annotations

import itertools
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import patch

import pytest

from taskboard_cli.exceptions import RemoteStoreError
from taskboard_cli.models import (
    Category,
    CategoryCreate,
    CategoryUpdate,
    Subtask,
    SubtaskCreate,
    SubtaskUpdate,
    Todo,
    TodoCreate,
    TodoStatus,
    TodoUpdate,
    User,
)
from taskboard_cli.repositories import (
    CategoryRepository,
    SubtaskRepository,
    TodoRepository,
)
from taskboard_cli.services.board_service import BoardContext, BoardController
from taskboard_cli.services.notifications import RecordingNotifier

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session", autouse=True)
def isolated_log_dir(tmp_path_factory):
    """Keep the rotating log file out of the real user log directory."""
    log_dir = str(tmp_path_factory.mktemp("logs"))
    with patch("taskboard_cli.utils.logger.user_log_dir", return_value=log_dir):
        yield log_dir


@pytest.fixture(autouse=True)
def isolated_config_dirs(tmp_path, monkeypatch):
    """Point config and credentials at *tmp_path* and drop the cached manager."""
    tmpdir = str(tmp_path)
    monkeypatch.delenv("TASKBOARD_API_ENDPOINT", raising=False)
    monkeypatch.delenv("TASKBOARD_API_KEY", raising=False)
    with patch("taskboard_cli.config.user_config_dir", return_value=tmpdir):
        with patch("taskboard_cli.config.user_data_dir", return_value=tmpdir):
            with patch("taskboard_cli.config._config_manager", None):
                yield tmp_path


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


class FakeStore:
    """Rows keyed by ID, joined the way the hosted store joins them.

    Add an operation name (e.g. ``"update_todo"``) to ``fail_on`` to make the
    next calls of that operation raise RemoteStoreError.
    """

    def __init__(self) -> None:
        self.todos: dict[str, dict[str, Any]] = {}
        self.categories: dict[str, dict[str, Any]] = {}
        self.subtasks: dict[str, dict[str, Any]] = {}
        self.fail_on: set[str] = set()
        self.calls: list[str] = []
        self._ids = itertools.count(1)

    def check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise RemoteStoreError(f"{operation} failed", status_code=500)

    def next_id(self, kind: str) -> tuple[str, datetime]:
        n = next(self._ids)
        return f"{kind}-{n:04d}", EPOCH + timedelta(minutes=n)

    def require(self, table: dict[str, dict[str, Any]], row_id: str) -> dict[str, Any]:
        if row_id not in table:
            raise RemoteStoreError(f"{row_id} not found", status_code=404)
        return table[row_id]

    def build_todo(self, row: dict[str, Any]) -> Todo:
        category = self.categories.get(row.get("category_id") or "")
        subtasks = sorted(
            (s for s in self.subtasks.values() if s["todo_id"] == row["id"]),
            key=lambda s: s["created_at"],
        )
        return Todo(
            **row,
            category=Category(**category) if category else None,
            subtasks=[Subtask(**s) for s in subtasks],
        )

    def todos_for(self, user_id: str) -> list[Todo]:
        rows = [r for r in self.todos.values() if r["user_id"] == user_id]
        rows.sort(key=lambda r: r["created_at"], reverse=True)
        return [self.build_todo(r) for r in rows]

    # Seeding helpers, bypassing failure injection

    def seed_category(self, user_id: str, name: str, color: str = "#000000") -> Category:
        category_id, created_at = self.next_id("cat")
        row = {
            "id": category_id,
            "name": name,
            "color": color,
            "user_id": user_id,
            "created_at": created_at,
        }
        self.categories[category_id] = row
        return Category(**row)

    def seed_todo(self, user_id: str, title: str, **fields: Any) -> Todo:
        todo_id, created_at = self.next_id("todo")
        row = TodoCreate(title=title, **fields).model_dump()
        row.update(id=todo_id, user_id=user_id, created_at=created_at)
        self.todos[todo_id] = row
        return self.build_todo(row)

    def seed_subtask(self, todo_id: str, title: str, status: TodoStatus = "pending") -> Subtask:
        subtask_id, created_at = self.next_id("sub")
        row = {
            "id": subtask_id,
            "title": title,
            "description": None,
            "status": status,
            "todo_id": todo_id,
            "created_at": created_at,
        }
        self.subtasks[subtask_id] = row
        return Subtask(**row)


class FakeTodoRepository(TodoRepository):
    def __init__(self, store: FakeStore):
        self.store = store

    async def list_all(self, user_id: str) -> list[Todo]:
        self.store.check("list_todos")
        return self.store.todos_for(user_id)

    async def add(self, user_id: str, todo_data: TodoCreate) -> Todo:
        self.store.check("add_todo")
        todo_id, created_at = self.store.next_id("todo")
        row = todo_data.model_dump()
        row.update(id=todo_id, user_id=user_id, created_at=created_at)
        self.store.todos[todo_id] = row
        return self.store.build_todo(row)

    async def update(self, todo_id: str, updates: TodoUpdate) -> Todo:
        self.store.check("update_todo")
        row = self.store.require(self.store.todos, todo_id)
        row.update(updates.model_dump())
        return self.store.build_todo(row)

    async def set_status(self, todo_id: str, status: TodoStatus) -> Todo:
        self.store.check("set_status")
        row = self.store.require(self.store.todos, todo_id)
        row["status"] = status
        return self.store.build_todo(row)

    async def delete(self, todo_id: str) -> bool:
        self.store.check("delete_todo")
        self.store.todos.pop(todo_id, None)
        for subtask_id in [
            s["id"] for s in self.store.subtasks.values() if s["todo_id"] == todo_id
        ]:
            del self.store.subtasks[subtask_id]
        return True


class FakeCategoryRepository(CategoryRepository):
    def __init__(self, store: FakeStore):
        self.store = store

    async def list_all(self, user_id: str) -> list[Category]:
        self.store.check("list_categories")
        rows = [r for r in self.store.categories.values() if r["user_id"] == user_id]
        return [Category(**r) for r in rows]

    async def add(self, user_id: str, category_data: CategoryCreate) -> Category:
        self.store.check("add_category")
        category_id, created_at = self.store.next_id("cat")
        row = category_data.model_dump()
        row.update(id=category_id, user_id=user_id, created_at=created_at)
        self.store.categories[category_id] = row
        return Category(**row)

    async def update(self, category_id: str, updates: CategoryUpdate) -> Category:
        self.store.check("update_category")
        row = self.store.require(self.store.categories, category_id)
        row.update(updates.model_dump())
        return Category(**row)

    async def delete(self, category_id: str) -> bool:
        self.store.check("delete_category")
        self.store.categories.pop(category_id, None)
        return True


class FakeSubtaskRepository(SubtaskRepository):
    def __init__(self, store: FakeStore):
        self.store = store

    async def add(self, todo_id: str, subtask_data: SubtaskCreate) -> Subtask:
        self.store.check("add_subtask")
        self.store.require(self.store.todos, todo_id)
        subtask_id, created_at = self.store.next_id("sub")
        row = subtask_data.model_dump()
        row.update(id=subtask_id, todo_id=todo_id, created_at=created_at)
        self.store.subtasks[subtask_id] = row
        return Subtask(**row)

    async def update(self, subtask_id: str, updates: SubtaskUpdate) -> Subtask:
        self.store.check("update_subtask")
        row = self.store.require(self.store.subtasks, subtask_id)
        row.update(updates.model_dump())
        return Subtask(**row)

    async def delete(self, subtask_id: str) -> bool:
        self.store.check("delete_subtask")
        self.store.subtasks.pop(subtask_id, None)
        return True


# ---------------------------------------------------------------------------
# Board fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def user() -> User:
    return User(id="user-1", email="ana@example.com")


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def fake_repositories(store):
    """Factories for the REST repositories, backed by the in-memory store."""
    return {
        "RestApiTodoRepository": lambda client: FakeTodoRepository(store),
        "RestApiCategoryRepository": lambda client: FakeCategoryRepository(store),
        "RestApiSubtaskRepository": lambda client: FakeSubtaskRepository(store),
    }


def make_controller(store: FakeStore, user: User, notifier) -> BoardController:
    return BoardController(
        BoardContext.for_user(user),
        FakeTodoRepository(store),
        FakeCategoryRepository(store),
        FakeSubtaskRepository(store),
        notifier=notifier,
    )


@pytest.fixture
def controller(store, user, notifier) -> BoardController:
    """A board controller over the in-memory store (not loaded yet)."""
    return make_controller(store, user, notifier)


@pytest.fixture
def open_board_stub(store, user, notifier):
    """Stand-in for ``open_board`` that skips the session and the network."""

    @asynccontextmanager
    async def _open_board(profile="default", notifier_override=None, client=None):
        board = make_controller(store, user, notifier)
        await board.load()
        try:
            yield board
        finally:
            board.teardown()

    return _open_board
