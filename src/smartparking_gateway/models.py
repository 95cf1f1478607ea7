"""Data models shared across the gateway layers."""

from __future__ import annotations

from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Credential(BaseModel):
    """Access/refresh token pair.

    Frozen so the pair can only be replaced as a whole.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str | None = None


class Identity(BaseModel):
    """The logged-in user record as returned by the API."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int | str


class TokenPayload(BaseModel):
    access: str = Field(min_length=1)
    refresh: str | None = None


class SessionPayload(BaseModel):
    """Login/register response: ``{tokens: {access, refresh}, user: {...}}``."""

    model_config = ConfigDict(extra="allow")

    tokens: TokenPayload | None = None
    user: Identity | None = None

    def credential(self) -> Credential | None:
        if self.tokens is None:
            return None
        return Credential(access_token=self.tokens.access, refresh_token=self.tokens.refresh)


class RefreshResponse(BaseModel):
    """Refresh endpoint response; ``refresh`` is present only when the server rotates it."""

    access: str = Field(min_length=1)
    refresh: str | None = None


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    NO_CONTENT = "no_content"
    AUTH_EXPIRED = "auth_expired"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    CLIENT_ERROR = "client_error"
    NETWORK_ERROR = "network_error"
    INVALID_RESPONSE = "invalid_response"


class GatewayOutcome(BaseModel):
    """Classified result of one HTTP exchange."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    endpoint: str
    method: str
    correlation_id: UUID
    status_code: int | None = None
    data: Any = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind in (OutcomeKind.SUCCESS, OutcomeKind.NO_CONTENT)
