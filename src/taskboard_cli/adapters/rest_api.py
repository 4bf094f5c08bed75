"""REST API adapters - Repository implementations over the hosted store.

These adapters wrap the endpoint clients to implement the repository
interfaces. They share one APIClient so the session's access token reaches
every request.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from taskboard_cli.api.categories import CategoriesAPI
from taskboard_cli.api.client import APIClient
from taskboard_cli.api.subtasks import SubtasksAPI
from taskboard_cli.api.todos import TodosAPI
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
    to_timestamp,
)
from taskboard_cli.repositories.repository import (
    CategoryRepository,
    SubtaskRepository,
    TodoRepository,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse(model: type[ModelT], row: Any, record: str, record_id: str | None = None) -> ModelT:
    """Validate one store row, mapping missing or malformed rows to RemoteStoreError."""
    if not row:
        target = f"{record} {record_id}" if record_id else record
        raise RemoteStoreError(f"{target} not found", status_code=404)
    try:
        return model.model_validate(row)
    except ValidationError as e:
        raise RemoteStoreError(f"Malformed {record} row: {e}") from e


def _parse_all(model: type[ModelT], rows: Any, record: str) -> list[ModelT]:
    try:
        return [model.model_validate(row) for row in rows or []]
    except ValidationError as e:
        raise RemoteStoreError(f"Malformed {record} row: {e}") from e


def _serialize_todo(data: BaseModel) -> dict[str, Any]:
    """Dump a todo draft/overwrite with the due date as a timestamp."""
    fields = data.model_dump()
    fields["due_date"] = to_timestamp(fields.get("due_date"))
    return fields


class RestApiTodoRepository(TodoRepository):
    """Todo repository implementation using the REST API."""

    def __init__(self, client: APIClient):
        self._client = client
        self._todos_api: TodosAPI | None = None

    @property
    def todos_api(self) -> TodosAPI:
        """Get or create TodosAPI instance."""
        if self._todos_api is None:
            self._todos_api = TodosAPI(self._client)
        return self._todos_api

    async def list_all(self, user_id: str) -> list[Todo]:
        rows = await self.todos_api.list_todos(user_id)
        return _parse_all(Todo, rows, "todo")

    async def add(self, user_id: str, todo_data: TodoCreate) -> Todo:
        row = await self.todos_api.create_todo(user_id, **_serialize_todo(todo_data))
        return _parse(Todo, row, "todo")

    async def update(self, todo_id: str, updates: TodoUpdate) -> Todo:
        # Full overwrite: nulls are sent on purpose
        row = await self.todos_api.update_todo(todo_id, **_serialize_todo(updates))
        return _parse(Todo, row, "todo", todo_id)

    async def set_status(self, todo_id: str, status: TodoStatus) -> Todo:
        row = await self.todos_api.update_todo(todo_id, status=status)
        return _parse(Todo, row, "todo", todo_id)

    async def delete(self, todo_id: str) -> bool:
        await self.todos_api.delete_todo(todo_id)
        return True


class RestApiCategoryRepository(CategoryRepository):
    """Category repository implementation using the REST API."""

    def __init__(self, client: APIClient):
        self._client = client
        self._categories_api: CategoriesAPI | None = None

    @property
    def categories_api(self) -> CategoriesAPI:
        """Get or create CategoriesAPI instance."""
        if self._categories_api is None:
            self._categories_api = CategoriesAPI(self._client)
        return self._categories_api

    async def list_all(self, user_id: str) -> list[Category]:
        rows = await self.categories_api.list_categories(user_id)
        return _parse_all(Category, rows, "category")

    async def add(self, user_id: str, category_data: CategoryCreate) -> Category:
        row = await self.categories_api.create_category(
            user_id, category_data.name, color=category_data.color
        )
        return _parse(Category, row, "category")

    async def update(self, category_id: str, updates: CategoryUpdate) -> Category:
        row = await self.categories_api.update_category(
            category_id, name=updates.name, color=updates.color
        )
        return _parse(Category, row, "category", category_id)

    async def delete(self, category_id: str) -> bool:
        await self.categories_api.delete_category(category_id)
        return True


class RestApiSubtaskRepository(SubtaskRepository):
    """Subtask repository implementation using the REST API."""

    def __init__(self, client: APIClient):
        self._client = client
        self._subtasks_api: SubtasksAPI | None = None

    @property
    def subtasks_api(self) -> SubtasksAPI:
        """Get or create SubtasksAPI instance."""
        if self._subtasks_api is None:
            self._subtasks_api = SubtasksAPI(self._client)
        return self._subtasks_api

    async def add(self, todo_id: str, subtask_data: SubtaskCreate) -> Subtask:
        row = await self.subtasks_api.create_subtask(todo_id, **subtask_data.model_dump())
        return _parse(Subtask, row, "subtask")

    async def update(self, subtask_id: str, updates: SubtaskUpdate) -> Subtask:
        row = await self.subtasks_api.update_subtask(subtask_id, **updates.model_dump())
        return _parse(Subtask, row, "subtask", subtask_id)

    async def delete(self, subtask_id: str) -> bool:
        await self.subtasks_api.delete_subtask(subtask_id)
        return True
