"""Main entrypoint for the CLI."""

from __future__ import annotations

from typing import Any

import typer

from smartparking_gateway.api_client import ApiClient
from smartparking_gateway.cli.utils import echo_json, parse_body, parse_pairs, run_api
from smartparking_gateway.config import settings
from smartparking_gateway.endpoints import ENDPOINTS
from smartparking_gateway.logging_utils import configure_gateway_logging

app = typer.Typer(help="SmartParking API client")


@app.callback()
def main() -> None:
    configure_gateway_logging(
        settings.SERVICE_NAME,
        environment=settings.ENVIRONMENT.value,
        log_level=settings.LOG_LEVEL,
    )


@app.command()
def login(
    username: str = typer.Option(..., prompt=True, help="Account username"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Account password"),
) -> None:
    """Log in and persist the session."""

    async def action(api: ApiClient) -> Any:
        await api.session.login({"username": username, "password": password})
        return api.session.current_user

    user = run_api(action)
    typer.secho("Login successful.", fg=typer.colors.GREEN)
    if user is not None:
        echo_json(user.model_dump())


@app.command()
def register(
    username: str = typer.Option(..., prompt=True, help="Account username"),
    email: str = typer.Option(..., prompt=True, help="Account email"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Account password"
    ),
    field: list[str] = typer.Option(None, "--field", help="Extra profile field as key=value"),
) -> None:
    """Register a new account; logs in when the server returns a session."""
    user_data: dict[str, Any] = {
        **parse_pairs(field, "--field"),
        "username": username,
        "email": email,
        "password": password,
    }

    async def action(api: ApiClient) -> bool:
        await api.session.register(user_data)
        return api.session.is_authenticated()

    if run_api(action):
        typer.secho("Registered and logged in.", fg=typer.colors.GREEN)
    else:
        typer.secho("Registered. Log in to start a session.", fg=typer.colors.GREEN)


@app.command()
def logout() -> None:
    """End the session locally and on the server."""

    async def action(api: ApiClient) -> None:
        await api.session.logout()

    run_api(action)
    typer.echo("Logged out.")


@app.command()
def whoami() -> None:
    """Show the persisted identity."""

    async def action(api: ApiClient) -> Any:
        if not api.session.is_authenticated():
            return None
        return api.session.current_user

    user = run_api(action)
    if user is None:
        typer.secho("Not logged in.", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    echo_json(user.model_dump())


@app.command()
def call(
    method: str = typer.Argument(..., help="HTTP verb"),
    path: str = typer.Argument(..., help="Resource path, e.g. /slots/"),
    body: str | None = typer.Option(None, help="JSON request body"),
    query: list[str] = typer.Option(None, "--query", help="Query parameter as key=value"),
) -> None:
    """Send an authenticated request to any resource path."""
    payload = parse_body(body)
    params = parse_pairs(query, "--query")

    async def action(api: ApiClient) -> Any:
        return await api.call(path, method.upper(), payload, params=params or None)

    echo_json(run_api(action))


@app.command()
def invoke(
    name: str = typer.Argument(..., help="Endpoint name, see `endpoints`"),
    param: list[str] = typer.Option(None, "--param", help="Path parameter as key=value"),
    query: list[str] = typer.Option(None, "--query", help="Query parameter as key=value"),
    body: str | None = typer.Option(None, help="JSON request body"),
) -> None:
    """Call a named SmartParking endpoint."""
    endpoint = ENDPOINTS.get(name)
    if endpoint is None:
        typer.secho(
            f"Unknown endpoint '{name}'. Run `endpoints` to list them.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=2)

    path_params = parse_pairs(param, "--param")
    try:
        endpoint.render(**path_params)
    except KeyError as exc:
        raise typer.BadParameter(f"Missing path parameter {exc}", param_hint="--param") from exc

    payload = parse_body(body)
    params = parse_pairs(query, "--query")

    async def action(api: ApiClient) -> Any:
        return await api.invoke(name, body=payload, params=params or None, **path_params)

    echo_json(run_api(action))


@app.command("endpoints")
def list_endpoints() -> None:
    """Print the registered endpoint table."""
    for name, endpoint in ENDPOINTS.items():
        typer.echo(f"{name:<26} {endpoint.method:<6} {endpoint.path}  {endpoint.description}")


if __name__ == "__main__":
    app()
