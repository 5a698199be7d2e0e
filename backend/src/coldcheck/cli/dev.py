"""Database and development helper commands."""

import asyncio
import sys

import click

from ..config import get_settings
from ..db import create_engine, init_models


@click.group("db")
def db_group() -> None:
    """Database management."""
    pass


@db_group.command("init")
def init_db() -> None:
    """Create any missing tables on the configured database.

    Intended for SQLite development databases; PostgreSQL deployments
    should run ``alembic upgrade head`` instead.
    """
    settings = get_settings()

    async def _init() -> None:
        engine = create_engine(settings.database_url)
        try:
            await init_models(engine)
        finally:
            await engine.dispose()

    try:
        asyncio.run(_init())
    except Exception as e:
        click.echo(f"Error: could not initialise database: {e}", err=True)
        sys.exit(1)
    click.echo(f"Database ready: {settings.database_url}")


@click.group("dev")
def dev_group() -> None:
    """Development helpers."""
    pass


@dev_group.command("token")
@click.option("--subject", "-s", required=True, help="User id placed in the token")
@click.option("--name", default="", help="Display name")
@click.option("--email", default="", help="Email address")
@click.option("--hours", type=int, default=None, help="Lifetime in hours")
def issue_token(subject: str, name: str, email: str, hours: int | None) -> None:
    """Print a bearer token for calling the API locally."""
    from datetime import timedelta

    from ..api.auth import User, create_access_token

    settings = get_settings()
    if settings.is_production:
        click.echo("Error: refusing to issue tokens in production", err=True)
        sys.exit(1)

    expires_in = timedelta(hours=hours) if hours else None
    click.echo(create_access_token(User(id=subject, name=name, email=email), expires_in))
