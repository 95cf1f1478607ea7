"""
Factory functions for GatewayError.

Each ``raise_*`` function builds an ErrorDetail for one error code and raises
it. ``raise_for_outcome`` maps a classified GatewayOutcome onto the matching
factory, returning the payload for successful outcomes.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, NoReturn
from uuid import UUID

from smartparking_gateway.error_enums import GatewayErrorCode
from smartparking_gateway.error_handling.error_detail import ErrorDetail
from smartparking_gateway.error_handling.gateway_error import GatewayError
from smartparking_gateway.models import GatewayOutcome, OutcomeKind

SERVICE_NAME = "smartparking_gateway"

SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."


def create_gateway_error(
    error_code: GatewayErrorCode,
    message: str,
    operation: str,
    correlation_id: UUID,
    **details: Any,
) -> GatewayError:
    """Build a GatewayError without raising it."""
    return GatewayError(
        ErrorDetail(
            error_code=error_code,
            message=message,
            correlation_id=correlation_id,
            timestamp=datetime.now(UTC),
            service=SERVICE_NAME,
            operation=operation,
            details=details,
        )
    )


def create_session_expired_error(
    operation: str, correlation_id: UUID, **details: Any
) -> GatewayError:
    return create_gateway_error(
        GatewayErrorCode.SESSION_EXPIRED,
        SESSION_EXPIRED_MESSAGE,
        operation,
        correlation_id,
        **details,
    )


def raise_session_expired(operation: str, correlation_id: UUID, **details: Any) -> NoReturn:
    raise create_session_expired_error(operation, correlation_id, **details)


def raise_authentication_error(
    operation: str, message: str, correlation_id: UUID, **details: Any
) -> NoReturn:
    raise create_gateway_error(
        GatewayErrorCode.AUTHENTICATION_ERROR, message, operation, correlation_id, **details
    )


def raise_forbidden(operation: str, message: str, correlation_id: UUID, **details: Any) -> NoReturn:
    raise create_gateway_error(
        GatewayErrorCode.FORBIDDEN, message, operation, correlation_id, **details
    )


def raise_not_found(operation: str, message: str, correlation_id: UUID, **details: Any) -> NoReturn:
    raise create_gateway_error(
        GatewayErrorCode.NOT_FOUND, message, operation, correlation_id, **details
    )


def raise_server_error(
    operation: str, message: str, correlation_id: UUID, **details: Any
) -> NoReturn:
    raise create_gateway_error(
        GatewayErrorCode.SERVER_ERROR, message, operation, correlation_id, **details
    )


def raise_client_error(
    operation: str, message: str, correlation_id: UUID, **details: Any
) -> NoReturn:
    raise create_gateway_error(
        GatewayErrorCode.CLIENT_ERROR, message, operation, correlation_id, **details
    )


def raise_network_error(
    operation: str, message: str, correlation_id: UUID, **details: Any
) -> NoReturn:
    raise create_gateway_error(
        GatewayErrorCode.NETWORK_ERROR, message, operation, correlation_id, **details
    )


def raise_invalid_response(
    operation: str, message: str, correlation_id: UUID, **details: Any
) -> NoReturn:
    raise create_gateway_error(
        GatewayErrorCode.INVALID_RESPONSE, message, operation, correlation_id, **details
    )


def raise_unknown_endpoint(operation: str, name: str, correlation_id: UUID) -> NoReturn:
    raise create_gateway_error(
        GatewayErrorCode.UNKNOWN_ENDPOINT,
        f"No endpoint registered under '{name}'",
        operation,
        correlation_id,
        endpoint_name=name,
    )


_RAISERS = {
    OutcomeKind.AUTH_EXPIRED: raise_authentication_error,
    OutcomeKind.UNAUTHENTICATED: raise_authentication_error,
    OutcomeKind.FORBIDDEN: raise_forbidden,
    OutcomeKind.NOT_FOUND: raise_not_found,
    OutcomeKind.SERVER_ERROR: raise_server_error,
    OutcomeKind.CLIENT_ERROR: raise_client_error,
    OutcomeKind.NETWORK_ERROR: raise_network_error,
    OutcomeKind.INVALID_RESPONSE: raise_invalid_response,
}


def raise_for_outcome(outcome: GatewayOutcome, operation: str) -> Any:
    """Return the parsed payload of a successful outcome or raise the matching error.

    Args:
        outcome: Classified result from the request gateway
        operation: Name of the calling operation, recorded on the error

    Returns:
        Parsed JSON payload, or None for empty responses

    Raises:
        GatewayError: For every non-success outcome kind
    """
    if outcome.kind is OutcomeKind.SUCCESS:
        return outcome.data
    if outcome.kind is OutcomeKind.NO_CONTENT:
        return None

    raiser = _RAISERS[outcome.kind]
    raiser(
        operation,
        outcome.message or f"HTTP {outcome.status_code}",
        outcome.correlation_id,
        status_code=outcome.status_code,
        endpoint=outcome.endpoint,
        method=outcome.method,
    )
