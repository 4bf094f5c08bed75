"""Repository abstraction layer for Taskboard CLI.

This module defines the abstract base classes (interfaces) the board
controller uses to reach the remote store, following the Ports & Adapters
pattern. The controller only ever sees these interfaces; the REST adapters
in ``taskboard_cli.adapters.rest_api`` implement them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

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
)


class TodoRepository(ABC):
    """Abstract base class for todo persistence operations."""

    @abstractmethod
    async def list_all(self, user_id: str) -> list[Todo]:
        """List a user's todos with category and subtasks joined.

        Args:
            user_id: Owner whose todos are listed

        Returns:
            Todo objects ordered by creation time, newest first

        Raises:
            RemoteStoreError: If the store cannot be read
        """
        raise NotImplementedError(
            "TodoRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, user_id: str, todo_data: TodoCreate) -> Todo:
        """Create a new todo owned by ``user_id``.

        Raises:
            RemoteStoreError: If the write is rejected
        """
        raise NotImplementedError("TodoRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, todo_id: str, updates: TodoUpdate) -> Todo:
        """Overwrite every editable field of a todo.

        Raises:
            RemoteStoreError: If the write is rejected or the todo is gone
        """
        raise NotImplementedError(
            "TodoRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def set_status(self, todo_id: str, status: TodoStatus) -> Todo:
        """Overwrite only the status of a todo.

        Raises:
            RemoteStoreError: If the write is rejected or the todo is gone
        """
        raise NotImplementedError(
            "TodoRepository.set_status() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, todo_id: str) -> bool:
        """Delete a todo.

        Returns:
            True if deletion was successful

        Raises:
            RemoteStoreError: If the delete is rejected
        """
        raise NotImplementedError(
            "TodoRepository.delete() must be implemented by adapter"
        )


class CategoryRepository(ABC):
    """Abstract base class for category persistence operations."""

    @abstractmethod
    async def list_all(self, user_id: str) -> list[Category]:
        """List a user's categories."""
        raise NotImplementedError(
            "CategoryRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, user_id: str, category_data: CategoryCreate) -> Category:
        """Create a new category owned by ``user_id``."""
        raise NotImplementedError(
            "CategoryRepository.add() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, category_id: str, updates: CategoryUpdate) -> Category:
        """Overwrite a category's name and color."""
        raise NotImplementedError(
            "CategoryRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, category_id: str) -> bool:
        """Delete a category. Todos referencing it are left to the store."""
        raise NotImplementedError(
            "CategoryRepository.delete() must be implemented by adapter"
        )


class SubtaskRepository(ABC):
    """Abstract base class for subtask persistence operations.

    Subtasks are read through ``TodoRepository.list_all``.
    """

    @abstractmethod
    async def add(self, todo_id: str, subtask_data: SubtaskCreate) -> Subtask:
        """Create a new subtask under ``todo_id``."""
        raise NotImplementedError(
            "SubtaskRepository.add() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, subtask_id: str, updates: SubtaskUpdate) -> Subtask:
        """Overwrite a subtask's title, description and status."""
        raise NotImplementedError(
            "SubtaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, subtask_id: str) -> bool:
        """Delete a subtask."""
        raise NotImplementedError(
            "SubtaskRepository.delete() must be implemented by adapter"
        )
