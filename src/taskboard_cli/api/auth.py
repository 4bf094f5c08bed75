"""Authentication API endpoints."""

from taskboard_cli.api.client import APIClient, json_body


class AuthAPI:
    """Authentication API client (GoTrue endpoints under /auth/v1)."""

    def __init__(self, client: APIClient):
        self.client = client

    async def login(self, email: str, password: str) -> dict:
        """Sign in with email and password.

        Returns the session: access_token, refresh_token, expires_in, user.
        """
        response = await self.client.post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            skip_auth=True,
        )
        return json_body(response)

    async def signup(self, email: str, password: str) -> dict:
        """Create an account.

        Returns a session when email confirmation is disabled, else the user.
        """
        response = await self.client.post(
            "/auth/v1/signup",
            json={"email": email, "password": password},
            skip_auth=True,
        )
        return json_body(response)

    async def logout(self) -> None:
        """Revoke the current access token."""
        await self.client.post("/auth/v1/logout")

    async def refresh_token(self, refresh_token: str) -> dict:
        """Exchange a refresh token for a new session."""
        response = await self.client.post(
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
            skip_auth=True,
        )
        return json_body(response)

    async def get_profile(self) -> dict:
        """Get the user the current access token belongs to."""
        response = await self.client.get("/auth/v1/user")
        return json_body(response)
