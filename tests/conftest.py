"""
Shared fixtures for the SmartParking gateway test suite.

Pipeline fixtures are built bottom-up so every test can pick the layer it
exercises: credential store, request gateway, refresh coordinator, session
controller or the ApiClient facade.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import httpx
import pytest

from smartparking_gateway.api_client import ApiClient
from smartparking_gateway.config import Environment, GatewaySettings
from smartparking_gateway.credential_store import CredentialStore
from smartparking_gateway.implementations import InMemoryKeyValueStore, InMemoryNavigator
from smartparking_gateway.refresh_coordinator import RefreshCoordinator
from smartparking_gateway.request_gateway import RequestGateway
from smartparking_gateway.session_controller import SessionController

API_BASE_URL = "http://smartparking.test/api"


@pytest.fixture
def gateway_settings(tmp_path: Path) -> GatewaySettings:
    """Provide settings pointing at the fake API host and a temp session file."""
    return GatewaySettings(
        API_BASE_URL=API_BASE_URL,
        STORAGE_PATH=tmp_path / "session.json",
        ENVIRONMENT=Environment.TESTING,
    )


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def navigator() -> InMemoryNavigator:
    """Navigator that starts on an authenticated view."""
    return InMemoryNavigator("/dashboard")


@pytest.fixture
def credential_store(storage: InMemoryKeyValueStore) -> CredentialStore:
    return CredentialStore(storage)


@pytest.fixture
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Real httpx client; respx patches its transport."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def request_gateway(
    http_client: httpx.AsyncClient,
    credential_store: CredentialStore,
    gateway_settings: GatewaySettings,
) -> RequestGateway:
    return RequestGateway(http_client, credential_store, gateway_settings)


@pytest.fixture
def coordinator(
    request_gateway: RequestGateway,
    credential_store: CredentialStore,
    gateway_settings: GatewaySettings,
) -> RefreshCoordinator:
    return RefreshCoordinator(request_gateway, credential_store, gateway_settings)


@pytest.fixture
def session_controller(
    coordinator: RefreshCoordinator,
    credential_store: CredentialStore,
    navigator: InMemoryNavigator,
    gateway_settings: GatewaySettings,
) -> SessionController:
    return SessionController(coordinator, credential_store, navigator, gateway_settings)


@pytest.fixture
def api_client(coordinator: RefreshCoordinator, session_controller: SessionController) -> ApiClient:
    return ApiClient(coordinator, session_controller)
