"""
FlashLearn CLI - terminal front end for the auth core.

Usage:
    flashlearn login demo@flashlearn.ai     # Sign in (prompts for password)
    flashlearn signup new@example.com      # Create a mock account and sign in
    flashlearn whoami                      # Show the persisted session
    flashlearn logout                      # Clear the session
    flashlearn demo                        # Walk through the reference scenario
    flashlearn remote login EMAIL          # Log in against the backend API

Mock accounts live in memory for the lifetime of one process. The session
snapshot is written to ~/.flashlearn/ (FLASHLEARN_DATA_DIR) and restored on
the next run.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Annotated, Awaitable, Callable, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from flashlearn.auth import (
    AuthError,
    AuthProvider,
    AuthService,
    BackendAuthClient,
    JsonFileStorage,
    MemoryStorage,
    SessionUser,
    build_auth_service,
)
from flashlearn.config import get_settings

# =============================================================================
# CLI Setup
# =============================================================================

app = typer.Typer(
    name="flashlearn",
    help="FlashLearn - sign in, sign up and inspect the local session",
    add_completion=False,
    rich_markup_mode="rich",
)

remote_app = typer.Typer(
    name="remote",
    help="Authenticate against the FlashLearn backend API",
)
app.add_typer(remote_app, name="remote")

console = Console()


def get_service() -> AuthService:
    """Build the process-wide AuthService over file storage."""
    return build_auth_service(get_settings())


def _describe(user: Optional[SessionUser]) -> str:
    if user is None:
        return "[dim]anonymous[/]"
    return f"[green]{user.email}[/] [dim]({user.uid})[/]"


def _run(operation: Callable[[], Awaitable[None]]) -> None:
    """Run an auth coroutine, turning AuthError into exit code 1."""
    try:
        asyncio.run(operation())
    except AuthError as e:
        console.print(f"[red]✗ {e.message}[/]")
        raise typer.Exit(1)


# =============================================================================
# Session Commands
# =============================================================================


@app.command()
def login(
    email: Annotated[str, typer.Argument(help="Account email")],
    password: Annotated[
        str, typer.Option("--password", "-p", prompt=True, hide_input=True, help="Account password")
    ],
) -> None:
    """Sign in with a mock account."""
    service = get_service()

    async def _login() -> None:
        with console.status("Signing in..."):
            user = await service.sign_in(email, password)
        console.print(f"[green]✓ Signed in as[/] {_describe(user)}")

    _run(_login)


@app.command()
def signup(
    email: Annotated[str, typer.Argument(help="Account email")],
    password: Annotated[
        str,
        typer.Option(
            "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True,
            help="Account password",
        ),
    ],
) -> None:
    """Create a mock account and sign in."""
    service = get_service()

    async def _signup() -> None:
        with console.status("Creating account..."):
            user = await service.sign_up(email, password)
        console.print(f"[green]✓ Account created, signed in as[/] {_describe(user)}")
        console.print(
            "[yellow]Mock accounts are held in memory for this process only. "
            "This session will not be restored by the next command.[/]"
        )

    _run(_signup)


@app.command()
def logout() -> None:
    """Sign out and clear the persisted session."""
    service = get_service()

    async def _logout() -> None:
        was_signed_in = service.is_authenticated
        with console.status("Signing out..."):
            await service.sign_out()
        if was_signed_in:
            console.print("[green]✓ Signed out[/]")
        else:
            console.print("[dim]No active session[/]")

    _run(_logout)


@app.command()
def whoami() -> None:
    """Show the session restored from disk."""
    service = get_service()
    user = service.get_current_session()

    table = Table(title="Current Session", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("State", "Authenticated" if user else "Anonymous")
    if user is not None:
        table.add_row("Email", user.email)
        table.add_row("UID", user.uid)
        table.add_row("Display name", user.display_name or "-")
    console.print(table)


@app.command()
def demo() -> None:
    """
    Walk through the reference auth scenario against a throwaway session.

    Uses in-memory storage, so the real persisted session is untouched.
    """
    settings = get_settings()
    storage = MemoryStorage()

    async def _no_delay(_seconds: float) -> None:
        return None

    service = build_auth_service(settings, storage=storage, sleep=_no_delay)

    table = Table(title="Auth Scenario")
    table.add_column("#", style="dim")
    table.add_column("Step", style="cyan")
    table.add_column("Outcome")
    table.add_column("Session")

    notifications: list[Optional[SessionUser]] = []

    steps: list[tuple[str, Callable[[], Awaitable[object]]]] = [
        (f"sign_in({settings.demo_email}, <demo password>)",
         lambda: service.sign_in(settings.demo_email, settings.demo_password)),
        (f"sign_in({settings.demo_email}, wrong)",
         lambda: service.sign_in(settings.demo_email, "wrong")),
        (f"sign_up({settings.demo_email}, x)",
         lambda: service.sign_up(settings.demo_email, "x")),
        ("sign_up(new@x.com, pw)",
         lambda: service.sign_up("new@x.com", "pw")),
        ("sign_out()", service.sign_out),
    ]

    async def _walk() -> None:
        with AuthProvider(service, on_change=notifications.append):
            for index, (label, step) in enumerate(steps, start=1):
                try:
                    await step()
                    outcome = "[green]ok[/]"
                except AuthError as e:
                    outcome = f"[red]{type(e).__name__}: {e.message}[/]"
                table.add_row(str(index), label, outcome, _describe(service.get_current_session()))

    asyncio.run(_walk())
    console.print(table)

    slot = storage.get_item(settings.session_key)
    console.print(
        Panel(
            f"Listener notifications: {len(notifications)}\n"
            f"Persisted slot '{settings.session_key}': {'cleared' if slot is None else slot}",
            title="Summary",
            border_style="cyan",
        )
    )


# =============================================================================
# Backend Commands
# =============================================================================


def _backend_client() -> BackendAuthClient:
    settings = get_settings()
    return BackendAuthClient(
        settings.api_base_url,
        JsonFileStorage(settings.data_dir),
        timeout=settings.api_timeout_seconds,
        token_key=settings.token_key,
    )


@remote_app.command("login")
def remote_login(
    email: Annotated[str, typer.Argument(help="Account email")],
    password: Annotated[
        str, typer.Option("--password", "-p", prompt=True, hide_input=True, help="Account password")
    ],
) -> None:
    """Log in against the backend and store the issued token."""

    async def _login() -> None:
        async with _backend_client() as client:
            result = await client.sign_in(email, password)
        console.print(f"[green]✓ Logged in as[/] {result.user.get('email', email)}")

    _run(_login)


@remote_app.command("signup")
def remote_signup(
    email: Annotated[str, typer.Argument(help="Account email")],
    password: Annotated[
        str,
        typer.Option(
            "--password", "-p", prompt=True, hide_input=True, confirmation_prompt=True,
            help="Account password",
        ),
    ],
    name: Annotated[str, typer.Option("--name", "-n", help="Display name")] = "",
) -> None:
    """Register with the backend and store the issued token."""

    async def _signup() -> None:
        async with _backend_client() as client:
            result = await client.sign_up(email, password, name)
        console.print(f"[green]✓ Registered[/] {result.user.get('email', email)}")

    _run(_signup)


@remote_app.command("logout")
def remote_logout() -> None:
    """Forget the stored backend token."""

    async def _logout() -> None:
        async with _backend_client() as client:
            had_token = client.is_authenticated()
            client.sign_out()
        console.print("[green]✓ Token cleared[/]" if had_token else "[dim]No stored token[/]")

    _run(_logout)


# =============================================================================
# Entry Point
# =============================================================================


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """FlashLearn auth CLI."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else get_settings().log_level.upper(),
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
