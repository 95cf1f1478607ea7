"""Outward-facing client: the generic ``call`` every resource helper goes through."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from smartparking_gateway.endpoints import ENDPOINTS, Endpoint
from smartparking_gateway.error_handling import raise_for_outcome, raise_unknown_endpoint
from smartparking_gateway.refresh_coordinator import RefreshCoordinator
from smartparking_gateway.session_controller import SessionController


class ApiClient:
    """Facade over the refresh-aware pipeline.

    ``session`` exposes login/register/logout; ``call`` and ``invoke`` return
    parsed JSON (or None for empty responses) and raise GatewayError otherwise.
    """

    def __init__(
        self,
        coordinator: RefreshCoordinator,
        session: SessionController,
        endpoints: Mapping[str, Endpoint] | None = None,
    ) -> None:
        self._coordinator = coordinator
        self.session = session
        self.endpoints: Mapping[str, Endpoint] = endpoints if endpoints is not None else ENDPOINTS

    async def call(
        self,
        resource_path: str,
        method: str = "GET",
        body: Any = None,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        outcome = await self._coordinator.execute(
            resource_path, method, body, headers, params=params, files=files
        )
        return raise_for_outcome(outcome, f"{outcome.method} {resource_path}")

    async def invoke(
        self,
        name: str,
        *,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
        **path_params: Any,
    ) -> Any:
        """Call a named endpoint from the endpoint table.

        Args:
            name: Endpoint name, e.g. ``"bookings.cancel"``
            body: Request body
            params: Query parameters (e.g. slot availability filters)
            **path_params: Values for the path template placeholders

        Raises:
            GatewayError: UNKNOWN_ENDPOINT for unregistered names, or any
                classified request failure.
        """
        endpoint = self.endpoints.get(name)
        if endpoint is None:
            raise_unknown_endpoint("invoke", name, uuid4())
        return await self.call(endpoint.render(**path_params), endpoint.method, body, params=params)
