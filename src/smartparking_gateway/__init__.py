"""SmartParking gateway: authenticated request pipeline for the SmartParking API."""

from smartparking_gateway.api_client import ApiClient
from smartparking_gateway.credential_store import CredentialStore
from smartparking_gateway.error_enums import GatewayErrorCode
from smartparking_gateway.error_handling import GatewayError
from smartparking_gateway.refresh_coordinator import RefreshCoordinator, RefreshState
from smartparking_gateway.request_gateway import RequestGateway
from smartparking_gateway.session_controller import SessionController

__all__ = [
    "ApiClient",
    "CredentialStore",
    "GatewayError",
    "GatewayErrorCode",
    "RefreshCoordinator",
    "RefreshState",
    "RequestGateway",
    "SessionController",
]
