"""Tests for the repository interfaces."""

import pytest

from taskboard_cli.adapters.rest_api import (
    RestApiCategoryRepository,
    RestApiSubtaskRepository,
    RestApiTodoRepository,
)
from taskboard_cli.repositories import (
    CategoryRepository,
    SubtaskRepository,
    TodoRepository,
)


@pytest.mark.parametrize("interface", [TodoRepository, CategoryRepository, SubtaskRepository])
def test_interfaces_cannot_be_instantiated(interface):
    with pytest.raises(TypeError):
        interface()


def test_partial_implementation_is_rejected():
    class HalfTodoRepository(TodoRepository):
        async def list_all(self, user_id):
            return []

    with pytest.raises(TypeError):
        HalfTodoRepository()


@pytest.mark.parametrize(
    "adapter, interface",
    [
        (RestApiTodoRepository, TodoRepository),
        (RestApiCategoryRepository, CategoryRepository),
        (RestApiSubtaskRepository, SubtaskRepository),
    ],
)
def test_rest_adapters_implement_interfaces(adapter, interface):
    assert issubclass(adapter, interface)
