"""Session service - sign-in, sign-up, sign-out and session restore.

The session is the only local state besides configuration: tokens and the
user identity are kept in the profile's credentials file so that each CLI
invocation can restore it.
"""

from __future__ import annotations

import time
from typing import Any

from pydantic import ValidationError

from taskboard_cli.api.auth import AuthAPI
from taskboard_cli.api.client import APIClient
from taskboard_cli.config import ConfigManager
from taskboard_cli.exceptions import (
    AuthenticationError,
    NotAuthenticatedError,
    RemoteStoreError,
)
from taskboard_cli.models import User
from taskboard_cli.utils.logger import get_logger

# Refresh tokens this many seconds before they actually expire
EXPIRY_LEEWAY = 30
DEFAULT_EXPIRES_IN = 3600


class SessionService:
    """Service owning the signed-in user's session."""

    def __init__(
        self,
        client: APIClient,
        config_manager: ConfigManager | None = None,
        auth_api: AuthAPI | None = None,
    ):
        """Initialize the session service.

        Args:
            client: API client whose bearer token follows the session
            config_manager: Where credentials are persisted (defaults to the client's)
            auth_api: Auth endpoint wrapper (defaults to one over ``client``)
        """
        self.client = client
        self.config_manager = config_manager or client.config_manager
        self.auth_api = auth_api or AuthAPI(client)
        self._user: User | None = None
        self.logger = get_logger("session")

    @property
    def current_user(self) -> User | None:
        """The signed-in user, or None."""
        return self._user

    def require_user(self) -> User:
        """Return the signed-in user.

        Raises:
            NotAuthenticatedError: If nobody is signed in
        """
        if self._user is None:
            raise NotAuthenticatedError(
                "Not logged in. Use 'taskboard auth login' to authenticate."
            )
        return self._user

    async def sign_in(self, email: str, password: str) -> User:
        """Sign in with email and password and persist the session.

        Raises:
            AuthenticationError: If the credentials are rejected or the
                store cannot be reached
        """
        try:
            session = await self.auth_api.login(email, password)
        except RemoteStoreError as e:
            self.logger.warning("sign-in failed for %s: %s", email, e)
            raise AuthenticationError(str(e)) from e

        user = self._start(session)
        self.logger.info("signed in as %s", user.email)
        return user

    async def sign_up(self, email: str, password: str) -> User:
        """Create an account.

        When the backend answers with a session (email confirmation off)
        the user is signed in right away; otherwise only the new identity
        is returned and ``current_user`` stays unset.

        Raises:
            AuthenticationError: If the account cannot be created
        """
        try:
            data = await self.auth_api.signup(email, password)
        except RemoteStoreError as e:
            self.logger.warning("sign-up failed for %s: %s", email, e)
            raise AuthenticationError(str(e)) from e

        if data.get("access_token"):
            user = self._start(data)
            self.logger.info("signed up and signed in as %s", user.email)
            return user

        user = self._parse_user(data.get("user") or data)
        self.logger.info("signed up %s, confirmation pending", user.email)
        return user

    async def sign_out(self) -> None:
        """Revoke the token remotely (best effort) and drop the local session."""
        try:
            if self.client.access_token:
                await self.auth_api.logout()
        except RemoteStoreError as e:
            self.logger.warning("token revoke failed, clearing local session anyway: %s", e)
        finally:
            email = self._user.email if self._user else None
            self._end()
            self.logger.info("signed out %s", email or "(no user)")

    async def restore(self) -> User | None:
        """Restore the persisted session, refreshing an expired token.

        Returns:
            The restored user, or None when there is no usable session
        """
        credentials = self.config_manager.load_credentials()
        if not credentials or not credentials.get("access_token"):
            return None

        expires_at = credentials.get("expires_at") or 0
        refresh_token = credentials.get("refresh_token")
        expired = expires_at <= time.time() + EXPIRY_LEEWAY

        if expired and refresh_token and self.config_manager.config.auth.auto_refresh:
            try:
                session = await self.auth_api.refresh_token(refresh_token)
                user = self._start(session)
            except (RemoteStoreError, AuthenticationError) as e:
                self.logger.warning("session refresh failed: %s", e)
                self._end()
                return None
            self.logger.info("refreshed session for %s", user.email)
            return user

        try:
            user = User(id=credentials["user_id"], email=credentials["email"])
        except (KeyError, ValidationError):
            self.logger.warning("stored credentials are incomplete, discarding them")
            self._end()
            return None

        self.client.set_access_token(credentials["access_token"])
        self._user = user
        return user

    async def fetch_user(self) -> User:
        """Ask the auth server who the restored token belongs to.

        A token the server no longer accepts ends the local session.

        Raises:
            NotAuthenticatedError: If nobody is signed in
            AuthenticationError: If the server rejects the token
            RemoteStoreError: If the server cannot be reached
        """
        self.require_user()
        try:
            data = await self.auth_api.get_profile()
        except RemoteStoreError as e:
            if e.status_code in (401, 403):
                self.logger.warning("stored session was rejected: %s", e)
                self._end()
                raise AuthenticationError(
                    "Session expired. Use 'taskboard auth login' to sign in again."
                ) from e
            raise

        self._user = self._parse_user(data)
        return self._user

    def _parse_user(self, data: Any) -> User:
        try:
            return User(id=data["id"], email=data["email"])
        except (KeyError, TypeError, ValidationError) as e:
            raise AuthenticationError("The server did not return a user") from e

    def _start(self, session: dict[str, Any]) -> User:
        user = self._parse_user(session.get("user"))
        expires_at = session.get("expires_at") or (
            time.time() + session.get("expires_in", DEFAULT_EXPIRES_IN)
        )
        self.config_manager.save_credentials(
            {
                "access_token": session["access_token"],
                "refresh_token": session.get("refresh_token"),
                "expires_at": expires_at,
                "user_id": user.id,
                "email": user.email,
            }
        )
        self.client.set_access_token(session["access_token"])
        self._user = user
        return user

    def _end(self) -> None:
        self.config_manager.clear_credentials()
        self.client.set_access_token(None)
        self._user = None
