"""Unit tests for the auth commands (login, signup, logout, whoami)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from taskboard_cli.commands.auth import app
from taskboard_cli.exceptions import (
    AuthenticationError,
    NotAuthenticatedError,
    RemoteStoreError,
)
from taskboard_cli.models import User

runner = CliRunner()

USER = User(id="user-1", email="ana@example.com")


def _run(args, session, **kwargs):
    client = MagicMock()
    client.close = AsyncMock()
    with (
        patch("taskboard_cli.commands.auth.get_client", return_value=client),
        patch("taskboard_cli.commands.auth.SessionService", return_value=session),
    ):
        result = runner.invoke(app, args, **kwargs)
    return result, client


def _session(**overrides):
    session = MagicMock()
    session.sign_in = AsyncMock(return_value=USER)
    session.sign_up = AsyncMock(return_value=USER)
    session.sign_out = AsyncMock()
    session.restore = AsyncMock(return_value=USER)
    session.require_user.return_value = USER
    session.fetch_user = AsyncMock(return_value=USER)
    session.current_user = USER
    for key, value in overrides.items():
        setattr(session, key, value)
    return session


class TestLogin:
    def test_login_success(self):
        session = _session()

        result, client = _run(
            ["login", "--email", "ana@example.com", "--password", "secret"], session
        )

        assert result.exit_code == 0
        assert "Bem-vindo de volta, ana@example.com!" in result.output
        session.sign_in.assert_awaited_once_with("ana@example.com", "secret")
        client.close.assert_awaited_once()

    def test_login_prompts(self):
        session = _session()

        result, _ = _run(["login"], session, input="ana@example.com\nsecret\n")

        assert result.exit_code == 0
        session.sign_in.assert_awaited_once_with("ana@example.com", "secret")

    def test_login_rejected(self):
        session = _session(sign_in=AsyncMock(side_effect=AuthenticationError("Invalid")))

        result, client = _run(
            ["login", "--email", "ana@example.com", "--password", "wrong"], session
        )

        assert result.exit_code == 3
        assert "Falha no login. Verifique suas credenciais." in result.output
        client.close.assert_awaited_once()


class TestSignup:
    def test_signup_signed_in(self):
        session = _session()

        result, _ = _run(
            ["signup", "--email", "ana@example.com", "--password", "secret"], session
        )

        assert result.exit_code == 0
        assert "Conta criada para ana@example.com" in result.output
        assert "Confirme seu email" not in result.output

    def test_signup_pending_confirmation(self):
        session = _session(current_user=None)

        result, _ = _run(
            ["signup", "--email", "ana@example.com", "--password", "secret"], session
        )

        assert result.exit_code == 0
        assert "Confirme seu email" in result.output

    def test_signup_failure(self):
        session = _session(
            sign_up=AsyncMock(side_effect=AuthenticationError("User already registered"))
        )

        result, _ = _run(
            ["signup", "--email", "ana@example.com", "--password", "secret"], session
        )

        assert result.exit_code == 3
        assert "User already registered" in result.output


class TestLogoutWhoami:
    def test_logout(self):
        session = _session()

        result, client = _run(["logout"], session)

        assert result.exit_code == 0
        assert "Sessão encerrada." in result.output
        session.restore.assert_awaited_once()
        session.sign_out.assert_awaited_once()
        client.close.assert_awaited_once()

    def test_whoami(self):
        session = _session()

        result, client = _run(["whoami"], session)

        assert result.exit_code == 0
        assert "ana@example.com" in result.output
        session.fetch_user.assert_awaited_once()
        client.close.assert_awaited_once()

    def test_whoami_not_logged_in(self):
        session = _session(restore=AsyncMock(return_value=None))
        session.fetch_user = AsyncMock(
            side_effect=NotAuthenticatedError(
                "Not logged in. Use 'taskboard auth login' to authenticate."
            )
        )

        result, _ = _run(["whoami"], session)

        assert result.exit_code == 3
        assert "Not logged in" in result.output

    def test_whoami_rejected_token(self):
        session = _session(
            fetch_user=AsyncMock(
                side_effect=AuthenticationError(
                    "Session expired. Use 'taskboard auth login' to sign in again."
                )
            )
        )

        result, _ = _run(["whoami"], session)

        assert result.exit_code == 3
        assert "Session expired" in result.output

    def test_whoami_store_unreachable(self):
        session = _session(fetch_user=AsyncMock(side_effect=RemoteStoreError("offline")))

        result, client = _run(["whoami"], session)

        assert result.exit_code == 4
        assert "Could not check the session: offline" in result.output
        client.close.assert_awaited_once()
