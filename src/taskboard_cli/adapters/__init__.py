"""Adapters module - Repository implementations for the hosted store.

- rest_api: PostgREST tables (todos, categories, subtasks)
"""

from .rest_api import (
    RestApiCategoryRepository,
    RestApiSubtaskRepository,
    RestApiTodoRepository,
)

__all__ = [
    "RestApiTodoRepository",
    "RestApiCategoryRepository",
    "RestApiSubtaskRepository",
]
