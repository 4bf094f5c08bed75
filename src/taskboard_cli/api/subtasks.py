"""Subtasks API endpoints."""

from typing import Any

from taskboard_cli.api.client import APIClient, json_body
from taskboard_cli.api.todos import RETURN_REPRESENTATION

SUBTASKS_PATH = "/rest/v1/subtasks"


class SubtasksAPI:
    """Subtasks API client.

    Subtasks are read through the todo select, so there is no list call.
    """

    def __init__(self, client: APIClient):
        self.client = client

    async def create_subtask(self, todo_id: str, **fields: Any) -> dict:
        """Insert one subtask under ``todo_id``."""
        data: dict[str, Any] = {"todo_id": todo_id}
        data.update(fields)

        response = await self.client.post(
            SUBTASKS_PATH, json=data, headers=RETURN_REPRESENTATION
        )
        rows = json_body(response)
        return rows[0] if isinstance(rows, list) and rows else rows

    async def update_subtask(self, subtask_id: str, **fields: Any) -> dict:
        """Overwrite the given fields of one subtask."""
        response = await self.client.patch(
            SUBTASKS_PATH,
            params={"id": f"eq.{subtask_id}"},
            json=fields,
            headers=RETURN_REPRESENTATION,
        )
        rows = json_body(response)
        return rows[0] if isinstance(rows, list) and rows else rows

    async def delete_subtask(self, subtask_id: str) -> None:
        """Delete one subtask."""
        await self.client.delete(SUBTASKS_PATH, params={"id": f"eq.{subtask_id}"})
