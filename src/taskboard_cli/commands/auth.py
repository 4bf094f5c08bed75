"""Authentication commands."""

import typer

from taskboard_cli.api.client import get_client
from taskboard_cli.exceptions import AuthenticationError, RemoteStoreError
from taskboard_cli.services.notifications import ConsoleNotifier
from taskboard_cli.services.session_service import SessionService
from taskboard_cli.utils.exit_codes import ERROR_AUTH_FAILURE, ERROR_NETWORK
from taskboard_cli.utils.typer_helpers import SuggestingGroup
from taskboard_cli.utils.ui.console import get_console
from taskboard_cli.utils.ui.formatters import format_info

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")
console = get_console()


@app.command("login")
@command_wrapper
async def login(
    email: str = typer.Option(..., "--email", "-e", prompt="Email", help="Email address"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt="Senha", hide_input=True, help="Password"
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Sign in and keep the session for later commands."""
    client = get_client(profile)
    notifier = ConsoleNotifier()
    try:
        user = await SessionService(client).sign_in(email, password)
    except AuthenticationError:
        notifier.error("Falha no login. Verifique suas credenciais.")
        raise typer.Exit(code=ERROR_AUTH_FAILURE)
    finally:
        await client.close()
    notifier.success(f"Bem-vindo de volta, {user.email}!")


@app.command("signup")
@command_wrapper
async def signup(
    email: str = typer.Option(..., "--email", "-e", prompt="Email", help="Email address"),
    password: str = typer.Option(
        ...,
        "--password",
        "-p",
        prompt="Senha",
        hide_input=True,
        confirmation_prompt=True,
        help="Password",
    ),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Create an account."""
    client = get_client(profile)
    notifier = ConsoleNotifier()
    session = SessionService(client)
    try:
        user = await session.sign_up(email, password)
    except AuthenticationError as e:
        notifier.error(str(e) or "Ocorreu um erro ao criar sua conta")
        raise typer.Exit(code=ERROR_AUTH_FAILURE)
    finally:
        await client.close()

    notifier.success(f"Conta criada para {user.email}")
    if session.current_user is None:
        format_info("Confirme seu email e depois use 'taskboard auth login'.")


@app.command("logout")
@command_wrapper
async def logout(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Sign out and forget the stored session."""
    client = get_client(profile)
    try:
        session = SessionService(client)
        await session.restore()
        await session.sign_out()
    finally:
        await client.close()
    ConsoleNotifier().success("Sessão encerrada.")


@app.command("whoami")
@command_wrapper
async def whoami(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show the signed-in user, as the auth server sees the stored token."""
    client = get_client(profile)
    try:
        session = SessionService(client)
        await session.restore()
        user = await session.fetch_user()
    except RemoteStoreError as e:
        raise AppError(f"Could not check the session: {e}", ERROR_NETWORK) from e
    finally:
        await client.close()
    console.print(f"[bold]{user.email}[/bold] [dim]({user.id})[/dim]")
