"""
smartparking_gateway.error_enums - Centralized error code definitions.
"""

from __future__ import annotations

from enum import Enum


class GatewayErrorCode(str, Enum):
    # Recovered internally by the refresh coordinator
    AUTH_EXPIRED = "AUTH_EXPIRED"

    # Terminal: the refresh itself failed, the session is gone
    SESSION_EXPIRED = "SESSION_EXPIRED"

    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"  # 401 without a session
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    SERVER_ERROR = "SERVER_ERROR"
    CLIENT_ERROR = "CLIENT_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    UNKNOWN_ENDPOINT = "UNKNOWN_ENDPOINT"
