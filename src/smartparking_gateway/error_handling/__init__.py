"""Error handling utilities for the SmartParking gateway."""

from smartparking_gateway.error_handling.error_detail import ErrorDetail
from smartparking_gateway.error_handling.factories import (
    SERVICE_NAME,
    SESSION_EXPIRED_MESSAGE,
    create_gateway_error,
    create_session_expired_error,
    raise_authentication_error,
    raise_client_error,
    raise_for_outcome,
    raise_forbidden,
    raise_invalid_response,
    raise_network_error,
    raise_not_found,
    raise_server_error,
    raise_session_expired,
    raise_unknown_endpoint,
)
from smartparking_gateway.error_handling.gateway_error import GatewayError

__all__ = [
    "ErrorDetail",
    "GatewayError",
    "SERVICE_NAME",
    "SESSION_EXPIRED_MESSAGE",
    "create_gateway_error",
    "create_session_expired_error",
    "raise_authentication_error",
    "raise_client_error",
    "raise_for_outcome",
    "raise_forbidden",
    "raise_invalid_response",
    "raise_network_error",
    "raise_not_found",
    "raise_server_error",
    "raise_session_expired",
    "raise_unknown_endpoint",
]
