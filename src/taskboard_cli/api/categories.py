"""Categories API endpoints."""

from typing import Optional

from taskboard_cli.api.client import APIClient, json_body
from taskboard_cli.api.todos import RETURN_REPRESENTATION

CATEGORIES_PATH = "/rest/v1/categories"


class CategoriesAPI:
    """Categories API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_categories(self, user_id: str) -> list[dict]:
        """List a user's categories."""
        response = await self.client.get(
            CATEGORIES_PATH,
            params={"select": "*", "user_id": f"eq.{user_id}"},
        )
        return json_body(response)

    async def create_category(
        self,
        user_id: str,
        name: str,
        *,
        color: Optional[str] = None,
    ) -> dict:
        """Create a new category."""
        data = {"name": name, "user_id": user_id}
        if color:
            data["color"] = color

        response = await self.client.post(
            CATEGORIES_PATH, json=data, headers=RETURN_REPRESENTATION
        )
        rows = json_body(response)
        return rows[0] if isinstance(rows, list) and rows else rows

    async def update_category(self, category_id: str, *, name: str, color: str) -> dict:
        """Overwrite a category's name and color."""
        response = await self.client.patch(
            CATEGORIES_PATH,
            params={"id": f"eq.{category_id}"},
            json={"name": name, "color": color},
            headers=RETURN_REPRESENTATION,
        )
        rows = json_body(response)
        return rows[0] if isinstance(rows, list) and rows else rows

    async def delete_category(self, category_id: str) -> None:
        """Delete a category."""
        await self.client.delete(CATEGORIES_PATH, params={"id": f"eq.{category_id}"})
