"""Shared helpers for the coldcheck CLI commands."""

import asyncio
import json
import sys
from typing import Any, Awaitable, Callable, TypeVar

import click

from ..config import get_settings
from ..db import create_engine, create_session_factory
from ..errors import ColdCheckError
from ..store import EntityStore

T = TypeVar("T")


def run_with_store(func: Callable[[EntityStore], Awaitable[T]]) -> T:
    """Run ``func`` against a store on the configured database.

    The engine lives only for the duration of the command. Core errors are
    printed and turn into exit status 1.
    """

    async def _main() -> T:
        engine = create_engine(get_settings().database_url)
        try:
            return await func(EntityStore(create_session_factory(engine)))
        finally:
            await engine.dispose()

    try:
        return asyncio.run(_main())
    except ColdCheckError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))
