"""
Unit tests for ApiClient and the endpoint table.
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from smartparking_gateway.api_client import ApiClient
from smartparking_gateway.credential_store import CredentialStore
from smartparking_gateway.endpoints import ENDPOINTS, Endpoint
from smartparking_gateway.error_enums import GatewayErrorCode
from smartparking_gateway.error_handling import GatewayError
from smartparking_gateway.models import Credential, Identity
from smartparking_gateway.refresh_coordinator import RefreshCoordinator
from smartparking_gateway.session_controller import SessionController

from .conftest import API_BASE_URL


@pytest.fixture(autouse=True)
def logged_in(credential_store: CredentialStore) -> None:
    credential_store.establish(Credential(access_token="A1", refresh_token="R1"), Identity(id=7))


class TestCall:
    async def test_returns_parsed_payload(
        self, api_client: ApiClient, respx_mock: respx.MockRouter
    ) -> None:
        respx_mock.get(f"{API_BASE_URL}/slots/").mock(
            return_value=httpx.Response(200, json=[{"id": 1}, {"id": 2}])
        )

        assert await api_client.call("/slots/") == [{"id": 1}, {"id": 2}]

    async def test_empty_response_returns_none(
        self, api_client: ApiClient, respx_mock: respx.MockRouter
    ) -> None:
        respx_mock.delete(f"{API_BASE_URL}/admin/slots/4/delete/").mock(
            return_value=httpx.Response(204)
        )

        assert await api_client.call("/admin/slots/4/delete/", "DELETE") is None

    async def test_failure_raises_gateway_error_with_context(
        self, api_client: ApiClient, respx_mock: respx.MockRouter
    ) -> None:
        respx_mock.get(f"{API_BASE_URL}/slots/99/").mock(return_value=httpx.Response(404))

        with pytest.raises(GatewayError) as exc_info:
            await api_client.call("/slots/99/")

        error = exc_info.value
        assert error.error_code == GatewayErrorCode.NOT_FOUND.value
        assert error.status_code == 404
        assert error.operation == "GET /slots/99/"
        assert error.error_detail.details["endpoint"] == "/slots/99/"

    async def test_forwards_query_params_and_headers(
        self, api_client: ApiClient, respx_mock: respx.MockRouter
    ) -> None:
        route = respx_mock.get(f"{API_BASE_URL}/slots/available/").mock(
            return_value=httpx.Response(200, json=[])
        )

        await api_client.call(
            "/slots/available/", params={"floor": "2"}, headers={"X-Client": "kiosk"}
        )

        request = route.calls.last.request
        assert request.url.params["floor"] == "2"
        assert request.headers["X-Client"] == "kiosk"


class TestInvoke:
    async def test_renders_path_and_uses_endpoint_method(
        self, api_client: ApiClient, respx_mock: respx.MockRouter
    ) -> None:
        route = respx_mock.post(f"{API_BASE_URL}/bookings/12/cancel/").mock(
            return_value=httpx.Response(200, json={"status": "cancelled"})
        )

        result = await api_client.invoke(
            "bookings.cancel", body={"reason": "Plans changed"}, booking_id=12
        )

        assert result == {"status": "cancelled"}
        assert json.loads(route.calls.last.request.content) == {"reason": "Plans changed"}

    async def test_passes_query_params(
        self, api_client: ApiClient, respx_mock: respx.MockRouter
    ) -> None:
        route = respx_mock.get(f"{API_BASE_URL}/slots/available/").mock(
            return_value=httpx.Response(200, json=[])
        )

        await api_client.invoke("slots.available", params={"start_time": "2024-05-01T08:00"})

        assert route.calls.last.request.url.params["start_time"] == "2024-05-01T08:00"

    async def test_unknown_endpoint_raises_without_request(
        self, api_client: ApiClient, respx_mock: respx.MockRouter
    ) -> None:
        with pytest.raises(GatewayError) as exc_info:
            await api_client.invoke("slots.teleport")

        assert exc_info.value.error_code == GatewayErrorCode.UNKNOWN_ENDPOINT.value
        assert exc_info.value.error_detail.details["endpoint_name"] == "slots.teleport"
        assert respx_mock.calls.call_count == 0

    async def test_missing_path_parameter_raises_key_error(self, api_client: ApiClient) -> None:
        with pytest.raises(KeyError):
            await api_client.invoke("slots.detail")

    async def test_custom_endpoint_table(
        self,
        coordinator: RefreshCoordinator,
        session_controller: SessionController,
        respx_mock: respx.MockRouter,
    ) -> None:
        client = ApiClient(
            coordinator,
            session_controller,
            endpoints={"health": Endpoint("GET", "/health/", "Liveness")},
        )
        respx_mock.get(f"{API_BASE_URL}/health/").mock(
            return_value=httpx.Response(200, json={"status": "ok"})
        )

        assert await client.invoke("health") == {"status": "ok"}
        with pytest.raises(GatewayError):
            await client.invoke("slots.list")


class TestEndpointTable:
    @pytest.mark.parametrize("name, endpoint", sorted(ENDPOINTS.items()))
    def test_endpoint_is_well_formed(self, name: str, endpoint: Endpoint) -> None:
        assert endpoint.method in {"GET", "POST", "PUT", "PATCH", "DELETE"}
        assert endpoint.path.startswith("/")
        assert endpoint.path.endswith("/")

    def test_render_fills_placeholders(self) -> None:
        assert ENDPOINTS["slots.detail"].render(slot_id=5) == "/slots/5/"
        assert (
            ENDPOINTS["admin.slots.change_status"].render(slot_id="A-3")
            == "/admin/slots/A-3/change-status/"
        )

    def test_booking_lifecycle_endpoints_are_registered(self) -> None:
        for action in ("create", "check_in", "check_out", "cancel", "payment"):
            assert f"bookings.{action}" in ENDPOINTS
