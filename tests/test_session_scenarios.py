"""
End-to-end session scenarios through the ApiClient facade.

The fake API accepts only the refreshed token, so the token handed out at
login is already stale by the time resources are requested.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import httpx
import pytest

from smartparking_gateway.api_client import ApiClient
from smartparking_gateway.error_enums import GatewayErrorCode
from smartparking_gateway.error_handling import GatewayError
from smartparking_gateway.implementations import InMemoryKeyValueStore, InMemoryNavigator
from smartparking_gateway.refresh_coordinator import RefreshCoordinator

from ._helpers_fake_api import FakeSmartParkingApi, release_refresh_when_queued


@pytest.fixture
def fake_api() -> FakeSmartParkingApi:
    return FakeSmartParkingApi(valid_token="A2")


@pytest.fixture
async def http_client(fake_api: FakeSmartParkingApi) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=fake_api.transport()) as client:
        yield client


@pytest.mark.concurrency
async def test_login_then_concurrent_calls_share_one_refresh(
    api_client: ApiClient,
    fake_api: FakeSmartParkingApi,
    coordinator: RefreshCoordinator,
    storage: InMemoryKeyValueStore,
) -> None:
    await api_client.session.login({"username": "driver", "password": "pw"})
    assert storage.read("authToken") == "A1"

    slots, dashboard, _ = await asyncio.gather(
        api_client.invoke("slots.list"),
        api_client.invoke("dashboard"),
        release_refresh_when_queued(fake_api, coordinator, 1),
    )

    assert slots == {"path": "/api/slots/"}
    assert dashboard == {"path": "/api/dashboard/"}
    assert fake_api.refresh_calls == 1
    assert fake_api.refresh_bodies == [{"refresh": "R1"}]
    assert storage.read("authToken") == "A2"
    assert storage.read("refreshToken") == "R1"
    assert api_client.session.is_authenticated() is True


@pytest.mark.concurrency
async def test_failed_refresh_logs_out_every_caller(
    api_client: ApiClient,
    fake_api: FakeSmartParkingApi,
    coordinator: RefreshCoordinator,
    storage: InMemoryKeyValueStore,
    navigator: InMemoryNavigator,
) -> None:
    await api_client.session.login({"username": "driver", "password": "pw"})
    fake_api.refresh_result = (401, {"detail": "Token is blacklisted"})

    results = await asyncio.gather(
        api_client.invoke("bookings.active"),
        api_client.invoke("bookings.history"),
        api_client.invoke("profile.get"),
        release_refresh_when_queued(fake_api, coordinator, 2),
        return_exceptions=True,
    )

    for result in results[:3]:
        assert isinstance(result, GatewayError)
        assert result.error_code == GatewayErrorCode.SESSION_EXPIRED.value
    assert fake_api.refresh_calls == 1
    assert storage.snapshot() == {}
    assert navigator.history == ["/login"]
    assert api_client.session.is_authenticated() is False


async def test_logout_after_refresh_clears_session(
    api_client: ApiClient,
    fake_api: FakeSmartParkingApi,
    storage: InMemoryKeyValueStore,
) -> None:
    await api_client.session.login({"username": "driver", "password": "pw"})
    fake_api.refresh_gate.set()
    await api_client.invoke("parking.info")

    await api_client.session.logout()

    assert storage.snapshot() == {}
    assert fake_api.refresh_calls == 1
