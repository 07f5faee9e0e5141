"""Account commands: ``login``, ``logout``, ``register`` and ``whoami``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer

from shopfront.cli.common.error_handler import handle_cli_errors
from shopfront.cli.common.output import emit
from shopfront.cli.common.services import get_services
from shopfront.shared.constants import ResponseFields, SessionMessages
from shopfront.shared.models import AuthUser

logger = logging.getLogger(__name__)


def _public_user(response: Any) -> dict[str, Any]:
    """User record without the token, for display."""
    if not isinstance(response, dict):
        return {}
    return {k: v for k, v in response.items() if k != ResponseFields.TOKEN}


@handle_cli_errors("login", fallback=SessionMessages.LOGIN_FAILED)
def login_command(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        help="Account password",
    ),
) -> None:
    """Log in and store the session token."""
    services = get_services()
    response = services.auth.login({"email": email, "password": password})
    user = _public_user(response)

    emit(
        "login",
        user,
        lambda console: console.print(
            f"[green]Logged in as {user.get('name') or email}[/green]",
        ),
    )


@handle_cli_errors("logout")
def logout_command() -> None:
    """Forget the stored session."""
    services = get_services()
    services.auth.logout()
    emit("logout", {"loggedOut": True}, lambda console: console.print("Logged out"))


@handle_cli_errors("register", fallback=SessionMessages.REGISTER_FAILED)
def register_command(
    name: str = typer.Option(..., "--name", "-n", prompt=True, help="Display name"),
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email"),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Account password",
    ),
    profile_image: Optional[Path] = typer.Option(
        None,
        "--profile-image",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Profile picture to upload",
    ),
) -> None:
    """Create an account (and log in when the server returns a token)."""
    services = get_services()
    response = services.auth.register(
        {
            "name": name,
            "email": email,
            "password": password,
            "profileImage": profile_image,
        },
    )
    user = _public_user(response)

    emit(
        "register",
        user,
        lambda console: console.print(f"[green]Account created for {email}[/green]"),
    )


@handle_cli_errors("whoami")
def whoami_command() -> None:
    """Show the logged-in user."""
    services = get_services()
    services.auth.require_authenticated("whoami")
    user: AuthUser | None = services.auth.get_current_user()
    data = user.model_dump(by_alias=True, exclude={"token"}, mode="json") if user else {}

    def render(console: Any) -> None:
        if user is None:
            console.print("Logged in (no user record stored)")
            return
        console.print(f"{user.name or ''} <{user.email or ''}>  role: {user.role}")

    emit("whoami", data, render)


__all__ = ["login_command", "logout_command", "register_command", "whoami_command"]
