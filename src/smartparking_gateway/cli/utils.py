"""Utilities for the CLI."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer
from dishka import make_async_container

from smartparking_gateway.api_client import ApiClient
from smartparking_gateway.config import settings
from smartparking_gateway.di import GatewayProvider
from smartparking_gateway.error_handling import GatewayError
from smartparking_gateway.implementations import InMemoryNavigator

T = TypeVar("T")


class ConsoleNavigator(InMemoryNavigator):
    """Tells the user to log in again when the session is forcibly ended."""

    def __init__(self, login_path: str, initial_path: str = "/") -> None:
        super().__init__(initial_path)
        self._login_path = login_path

    def navigate(self, path: str) -> None:
        super().navigate(path)
        if path == self._login_path:
            typer.secho(
                "Session expired. Run `smartparking-gateway login` to sign in again.",
                fg=typer.colors.YELLOW,
                err=True,
            )


def build_provider() -> GatewayProvider:
    return GatewayProvider(settings=settings, navigator=ConsoleNavigator(settings.LOGIN_VIEW_PATH))


async def _with_api(action: Callable[[ApiClient], Awaitable[T]]) -> T:
    container = make_async_container(build_provider())
    try:
        api = await container.get(ApiClient)
        return await action(api)
    finally:
        await container.close()


def run_api(action: Callable[[ApiClient], Awaitable[T]]) -> T:
    """Run an async action against a fresh ApiClient, exiting 1 on gateway errors."""
    try:
        return asyncio.run(_with_api(action))
    except GatewayError as error:
        typer.secho(str(error), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from error


def parse_pairs(values: list[str] | None, option: str) -> dict[str, str]:
    """Turn repeated ``key=value`` options into a dict."""
    pairs: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{item}'", param_hint=option)
        pairs[key] = value
    return pairs


def parse_body(raw: str | None) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise typer.BadParameter(f"Body is not valid JSON: {exc}", param_hint="--body") from exc


def echo_json(payload: Any) -> None:
    if payload is None:
        typer.echo("No content.")
        return
    typer.echo(json.dumps(payload, indent=2, default=str))
