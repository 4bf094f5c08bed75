"""Board service - keeps the in-memory board in step with the remote store.

Every mutation follows the same pattern: one remote write, then a refetch of
the affected collections, then a notification. Nothing is applied locally
before the store confirms it, so a failed write leaves the board untouched.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from taskboard_cli.adapters.rest_api import (
    RestApiCategoryRepository,
    RestApiSubtaskRepository,
    RestApiTodoRepository,
)
from taskboard_cli.api.client import APIClient
from taskboard_cli.exceptions import RemoteStoreError
from taskboard_cli.models import (
    STATUS_LABELS,
    STATUS_ORDER,
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
from taskboard_cli.services.notifications import ConsoleNotifier, Notifier
from taskboard_cli.services.session_service import SessionService
from taskboard_cli.utils.logger import get_logger


def next_status(status: TodoStatus) -> TodoStatus:
    """Next column in the cycle, wrapping completed -> pending."""
    index = STATUS_ORDER.index(status)
    return STATUS_ORDER[(index + 1) % len(STATUS_ORDER)]


def previous_status(status: TodoStatus) -> TodoStatus:
    """Previous column in the cycle, wrapping pending -> completed."""
    index = STATUS_ORDER.index(status)
    return STATUS_ORDER[(index - 1) % len(STATUS_ORDER)]


def toggled_subtask_status(status: TodoStatus) -> TodoStatus:
    """Checkbox semantics: completed -> pending, anything else -> completed."""
    return "pending" if status == "completed" else "completed"


def partition_by_status(todos: list[Todo]) -> dict[TodoStatus, list[Todo]]:
    """Split todos into one list per status, keeping their order."""
    columns: dict[TodoStatus, list[Todo]] = {status: [] for status in STATUS_ORDER}
    for todo in todos:
        columns[todo.status].append(todo)
    return columns


@dataclass
class BoardContext:
    """In-memory board state for one signed-in user.

    Attributes:
        user: The user whose board this is
        todos: Todos as last fetched, newest first
        categories: Categories as last fetched
        is_loading: True until the first todo fetch completes
        editing_todo_id: Todo currently open for editing, if any
    """

    user: User
    todos: list[Todo] = field(default_factory=list)
    categories: list[Category] = field(default_factory=list)
    is_loading: bool = True
    editing_todo_id: str | None = None

    @classmethod
    def for_user(cls, user: User) -> "BoardContext":
        return cls(user=user)

    def clear(self) -> None:
        self.todos = []
        self.categories = []
        self.editing_todo_id = None
        self.is_loading = True


class BoardController:
    """Task board controller.

    Holds the board context and the repositories that reach the store.
    Public operations return True on success and False on failure; failures
    are logged and reported through the notifier, never raised.
    """

    def __init__(
        self,
        context: BoardContext,
        todo_repository: TodoRepository,
        category_repository: CategoryRepository,
        subtask_repository: SubtaskRepository,
        notifier: Notifier | None = None,
    ):
        self.context = context
        self.todos_repo = todo_repository
        self.categories_repo = category_repository
        self.subtasks_repo = subtask_repository
        self.notifier = notifier or ConsoleNotifier()
        self.logger = get_logger("board")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def todos(self) -> list[Todo]:
        return self.context.todos

    @property
    def categories(self) -> list[Category]:
        return self.context.categories

    async def load(self) -> bool:
        """Fetch todos and categories for the context's user."""
        todos_ok = await self.fetch_todos()
        categories_ok = await self.fetch_categories()
        return todos_ok and categories_ok

    async def fetch_todos(self) -> bool:
        """Replace the in-memory todos with the store's current list."""
        try:
            self.context.todos = await self.todos_repo.list_all(self.context.user.id)
            return True
        except RemoteStoreError as e:
            self.logger.error("fetching todos failed: %s", e)
            self.notifier.error("Erro ao buscar tarefas.")
            return False
        finally:
            self.context.is_loading = False

    async def fetch_categories(self) -> bool:
        """Replace the in-memory categories with the store's current list."""
        try:
            self.context.categories = await self.categories_repo.list_all(
                self.context.user.id
            )
            return True
        except RemoteStoreError as e:
            self.logger.error("fetching categories failed: %s", e)
            self.notifier.error("Erro ao buscar categorias.")
            return False

    def columns_by_status(self) -> dict[TodoStatus, list[Todo]]:
        """The board's three columns, recomputed from the current todos."""
        return partition_by_status(self.context.todos)

    def find_todo(self, todo_id: str) -> Todo | None:
        return next((t for t in self.context.todos if t.id == todo_id), None)

    def find_category(self, category_id: str) -> Category | None:
        return next((c for c in self.context.categories if c.id == category_id), None)

    def find_subtask(self, subtask_id: str) -> Subtask | None:
        for todo in self.context.todos:
            for subtask in todo.subtasks:
                if subtask.id == subtask_id:
                    return subtask
        return None

    @property
    def subtasks(self) -> list[Subtask]:
        return [subtask for todo in self.context.todos for subtask in todo.subtasks]

    # ------------------------------------------------------------------
    # Mutation plumbing
    # ------------------------------------------------------------------

    async def _mutate(
        self,
        action: str,
        write: Callable[[], Awaitable[Any]],
        refetch: tuple[Callable[[], Awaitable[bool]], ...],
        success_message: str,
        error_message: str,
    ) -> bool:
        """Run one remote write, then refetch and notify."""
        try:
            await write()
        except RemoteStoreError as e:
            self.logger.error("%s failed: %s", action, e)
            self.notifier.error(error_message)
            return False

        self.logger.info("%s succeeded", action)
        for fetch in refetch:
            await fetch()
        self.notifier.success(success_message)
        return True

    def _missing(self, kind: str, item_id: str) -> bool:
        self.logger.warning("%s %s is not on the board", kind, item_id)
        self.notifier.error(f"{kind} não encontrada.")
        return False

    # ------------------------------------------------------------------
    # Todos
    # ------------------------------------------------------------------

    async def create_todo(self, draft: TodoCreate) -> bool:
        """Create a todo for the current user."""
        return await self._mutate(
            "create_todo",
            lambda: self.todos_repo.add(self.context.user.id, draft),
            (self.fetch_todos,),
            f'Tarefa "{draft.title}" criada com sucesso!',
            "Erro ao criar tarefa. Tente novamente.",
        )

    async def update_todo(self, todo_id: str, patch: TodoUpdate) -> bool:
        """Overwrite every editable field of a todo."""
        updated = await self._mutate(
            "update_todo",
            lambda: self.todos_repo.update(todo_id, patch),
            (self.fetch_todos,),
            f'Tarefa "{patch.title}" atualizada com sucesso!',
            "Erro ao atualizar tarefa. Tente novamente.",
        )
        if updated and self.context.editing_todo_id == todo_id:
            self.context.editing_todo_id = None
        return updated

    async def delete_todo(self, todo_id: str) -> bool:
        """Delete a todo and drop any edit state that pointed at it."""
        deleted = await self._mutate(
            "delete_todo",
            lambda: self.todos_repo.delete(todo_id),
            (self.fetch_todos,),
            "Tarefa excluída com sucesso!",
            "Erro ao excluir tarefa. Tente novamente.",
        )
        if deleted and self.context.editing_todo_id == todo_id:
            self.context.editing_todo_id = None
        return deleted

    async def change_status(self, todo_id: str, new_status: TodoStatus) -> bool:
        """Move a todo to ``new_status``; nothing else about it changes."""
        return await self._mutate(
            "change_status",
            lambda: self.todos_repo.set_status(todo_id, new_status),
            (self.fetch_todos,),
            f"Tarefa movida para {STATUS_LABELS[new_status]}",
            "Erro ao atualizar status da tarefa",
        )

    async def advance_status(self, todo_id: str) -> bool:
        """Move a todo one column forward (completed wraps to pending)."""
        todo = self.find_todo(todo_id)
        if todo is None:
            return self._missing("Tarefa", todo_id)
        target = next_status(todo.status)
        return await self._mutate(
            "advance_status",
            lambda: self.todos_repo.set_status(todo_id, target),
            (self.fetch_todos,),
            f"Tarefa movida para {STATUS_LABELS[target]}",
            "Erro ao mover tarefa. Tente novamente.",
        )

    async def regress_status(self, todo_id: str) -> bool:
        """Move a todo one column back (pending wraps to completed)."""
        todo = self.find_todo(todo_id)
        if todo is None:
            return self._missing("Tarefa", todo_id)
        target = previous_status(todo.status)
        return await self._mutate(
            "regress_status",
            lambda: self.todos_repo.set_status(todo_id, target),
            (self.fetch_todos,),
            f"Tarefa movida para {STATUS_LABELS[target]}",
            "Erro ao mover tarefa. Tente novamente.",
        )

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------
    # Todos embed their category row, so category writes refetch both lists.

    async def create_category(self, draft: CategoryCreate) -> bool:
        return await self._mutate(
            "create_category",
            lambda: self.categories_repo.add(self.context.user.id, draft),
            (self.fetch_categories, self.fetch_todos),
            f'Categoria "{draft.name}" criada com sucesso!',
            "Erro ao criar categoria. Tente novamente.",
        )

    async def update_category(self, category_id: str, patch: CategoryUpdate) -> bool:
        return await self._mutate(
            "update_category",
            lambda: self.categories_repo.update(category_id, patch),
            (self.fetch_categories, self.fetch_todos),
            f'Categoria "{patch.name}" atualizada com sucesso!',
            "Erro ao atualizar categoria. Tente novamente.",
        )

    async def delete_category(self, category_id: str) -> bool:
        """Delete a category; referencing todos are not touched here."""
        return await self._mutate(
            "delete_category",
            lambda: self.categories_repo.delete(category_id),
            (self.fetch_categories, self.fetch_todos),
            "Categoria excluída com sucesso!",
            "Erro ao excluir categoria. Tente novamente.",
        )

    # ------------------------------------------------------------------
    # Subtasks
    # ------------------------------------------------------------------

    async def create_subtask(self, todo_id: str, draft: SubtaskCreate) -> bool:
        return await self._mutate(
            "create_subtask",
            lambda: self.subtasks_repo.add(todo_id, draft),
            (self.fetch_todos,),
            f'Subtarefa "{draft.title}" criada com sucesso!',
            "Erro ao criar subtarefa. Tente novamente.",
        )

    async def update_subtask(self, subtask: Subtask) -> bool:
        """Save a subtask's title, description and status as given."""
        return await self._mutate(
            "update_subtask",
            lambda: self.subtasks_repo.update(
                subtask.id, SubtaskUpdate.from_subtask(subtask)
            ),
            (self.fetch_todos,),
            f'Subtarefa "{subtask.title}" atualizada com sucesso!',
            "Erro ao atualizar subtarefa. Tente novamente.",
        )

    async def delete_subtask(self, subtask_id: str) -> bool:
        return await self._mutate(
            "delete_subtask",
            lambda: self.subtasks_repo.delete(subtask_id),
            (self.fetch_todos,),
            "Subtarefa excluída com sucesso!",
            "Erro ao excluir subtarefa. Tente novamente.",
        )

    async def toggle_subtask_completion(self, subtask: Subtask) -> bool:
        """Tick or untick a subtask. in_progress is never produced."""
        toggled = subtask.model_copy(
            update={"status": toggled_subtask_status(subtask.status)}
        )
        return await self.update_subtask(toggled)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def teardown(self) -> None:
        """Forget all board state (on sign-out or when the board closes)."""
        self.context.clear()


@asynccontextmanager
async def open_board(
    profile: str = "default",
    notifier: Notifier | None = None,
    client: APIClient | None = None,
) -> AsyncIterator[BoardController]:
    """Restore the session and yield a loaded board controller.

    Raises:
        NotAuthenticatedError: If no session can be restored
    """
    client = client or APIClient(profile)
    controller: BoardController | None = None
    try:
        session = SessionService(client)
        await session.restore()
        user = session.require_user()

        controller = BoardController(
            BoardContext.for_user(user),
            RestApiTodoRepository(client),
            RestApiCategoryRepository(client),
            RestApiSubtaskRepository(client),
            notifier=notifier,
        )
        await controller.load()
        yield controller
    finally:
        if controller is not None:
            controller.teardown()
        await client.close()
