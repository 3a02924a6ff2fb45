"""Flask CLI commands for managing user accounts."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from instagram.core.extensions import get_password_hasher
from instagram.services._shared.errors import ServiceError
from instagram.services.users import UserDto, UserService

LOGGER = logging.getLogger(__name__)


@click.group("users")
def users_cli() -> None:
    """Create and inspect user accounts."""


@users_cli.command("create")
@click.option("--full-name", required=True, help="Display name.")
@click.option("--username", required=True, help="Unique handle used to sign in.")
@click.option("--email", required=True, help="Unique contact email.")
@click.password_option("--password", help="Plaintext password (prompted when omitted).")
@with_appcontext
def create_user(full_name: str, username: str, email: str, password: str) -> None:
    """Create a user through the same service as the sign-up endpoint."""
    service = UserService(get_password_hasher())
    dto = UserDto(id=None, full_name=full_name, username=username, email=email, password=password)
    try:
        user = service.create_user(dto)
    except ServiceError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created user id={user.id} username={user.username}")


@users_cli.command("list")
@with_appcontext
def list_users() -> None:
    """Print every user, one per line."""
    users = UserService(get_password_hasher()).find_all()
    if not users:
        click.echo("(no users)")
        return
    width = max(len(u.username) for u in users)
    for user in users:
        click.echo(f"{user.id:>5}  {user.username.ljust(width)}  {user.email}  {user.full_name}")
