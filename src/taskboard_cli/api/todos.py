"""Todos API endpoints."""

from typing import Any

from taskboard_cli.api.client import APIClient, json_body

TODOS_PATH = "/rest/v1/todos"

# Embed the referenced category row and the todo's subtasks
TODO_SELECT = "*,category:categories(*),subtasks:subtasks(*)"

RETURN_REPRESENTATION = {"Prefer": "return=representation"}


class TodosAPI:
    """Todos API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_todos(self, user_id: str) -> list[dict]:
        """List a user's todos with relations, newest first."""
        params = {
            "select": TODO_SELECT,
            "user_id": f"eq.{user_id}",
            "order": "created_at.desc",
        }
        response = await self.client.get(TODOS_PATH, params=params)
        return json_body(response)

    async def create_todo(self, user_id: str, **fields: Any) -> dict:
        """Insert one todo owned by ``user_id``."""
        data: dict[str, Any] = {"user_id": user_id}
        data.update(fields)

        response = await self.client.post(
            TODOS_PATH, json=data, headers=RETURN_REPRESENTATION
        )
        rows = json_body(response)
        return rows[0] if isinstance(rows, list) and rows else rows

    async def update_todo(self, todo_id: str, **fields: Any) -> dict:
        """Overwrite the given fields of one todo."""
        response = await self.client.patch(
            TODOS_PATH,
            params={"id": f"eq.{todo_id}"},
            json=fields,
            headers=RETURN_REPRESENTATION,
        )
        rows = json_body(response)
        return rows[0] if isinstance(rows, list) and rows else rows

    async def delete_todo(self, todo_id: str) -> None:
        """Delete one todo."""
        await self.client.delete(TODOS_PATH, params={"id": f"eq.{todo_id}"})
