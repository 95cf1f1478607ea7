"""Dependency Injection providers for the SmartParking gateway.

Provides a Dishka APP-scoped provider wiring storage, navigation, the HTTP
client and the authenticated-request pipeline.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from dishka import Provider, Scope, provide

from smartparking_gateway.api_client import ApiClient
from smartparking_gateway.config import GatewaySettings, settings
from smartparking_gateway.credential_store import CredentialStore
from smartparking_gateway.implementations import InMemoryNavigator, JsonFileKeyValueStore
from smartparking_gateway.protocols import KeyValueStoreProtocol, NavigatorProtocol
from smartparking_gateway.refresh_coordinator import RefreshCoordinator
from smartparking_gateway.request_gateway import RequestGateway
from smartparking_gateway.session_controller import SessionController


class GatewayProvider(Provider):
    """Infrastructure and pipeline provider.

    Settings, storage and navigator can be overridden through the
    constructor; the defaults are the global settings, a JSON file store at
    ``STORAGE_PATH`` and an in-memory navigator.
    """

    scope = Scope.APP

    def __init__(
        self,
        settings: GatewaySettings | None = None,
        storage: KeyValueStoreProtocol | None = None,
        navigator: NavigatorProtocol | None = None,
    ) -> None:
        super().__init__()
        self._settings = settings
        self._storage = storage
        self._navigator = navigator

    @provide
    def get_config(self) -> GatewaySettings:
        """Provide settings singleton."""
        return self._settings or settings

    @provide
    async def get_http_client(self, config: GatewaySettings) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client with connection pooling."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(
                config.HTTP_CLIENT_TIMEOUT_SECONDS,
                connect=config.HTTP_CLIENT_CONNECT_TIMEOUT_SECONDS,
            )
        ) as client:
            yield client

    @provide
    def provide_storage(self, config: GatewaySettings) -> KeyValueStoreProtocol:
        if self._storage is not None:
            return self._storage
        return JsonFileKeyValueStore(config.STORAGE_PATH)

    @provide
    def provide_navigator(self) -> NavigatorProtocol:
        if self._navigator is not None:
            return self._navigator
        return InMemoryNavigator()

    @provide
    def provide_credential_store(self, storage: KeyValueStoreProtocol) -> CredentialStore:
        return CredentialStore(storage)

    @provide
    def provide_request_gateway(
        self,
        http_client: httpx.AsyncClient,
        credential_store: CredentialStore,
        config: GatewaySettings,
    ) -> RequestGateway:
        return RequestGateway(http_client, credential_store, config)

    @provide
    def provide_refresh_coordinator(
        self,
        gateway: RequestGateway,
        credential_store: CredentialStore,
        config: GatewaySettings,
    ) -> RefreshCoordinator:
        return RefreshCoordinator(gateway, credential_store, config)

    @provide
    def provide_session_controller(
        self,
        coordinator: RefreshCoordinator,
        credential_store: CredentialStore,
        navigator: NavigatorProtocol,
        config: GatewaySettings,
    ) -> SessionController:
        return SessionController(coordinator, credential_store, navigator, config)

    @provide
    def provide_api_client(
        self, coordinator: RefreshCoordinator, session: SessionController
    ) -> ApiClient:
        # Depending on SessionController guarantees force_logout is wired in
        return ApiClient(coordinator, session)
