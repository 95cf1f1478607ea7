"""Single authenticated HTTP exchange with outcome classification.

The gateway attaches the bearer token, sends one request and maps the
response onto an OutcomeKind. It holds no refresh state and never touches
the credential store beyond reading the current access token.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID, uuid4

import httpx

from smartparking_gateway.config import GatewaySettings
from smartparking_gateway.credential_store import CredentialStore
from smartparking_gateway.logging_utils import create_gateway_logger
from smartparking_gateway.models import GatewayOutcome, OutcomeKind

logger = create_gateway_logger("smartparking_gateway.request_gateway")

FORBIDDEN_MESSAGE = "You do not have permission to perform this action."
NOT_FOUND_MESSAGE = "The requested resource was not found."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."
NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
INVALID_RESPONSE_MESSAGE = "The server returned a response that could not be read."

CORRELATION_HEADER = "X-Correlation-ID"


class RequestGateway:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        credential_store: CredentialStore,
        settings: GatewaySettings,
    ) -> None:
        """Initialize with a shared HTTP client.

        Args:
            http_client: Shared httpx AsyncClient instance
            credential_store: Source of the current access token
            settings: Gateway settings (base URL)
        """
        self._client = http_client
        self._store = credential_store
        self._settings = settings

    async def issue(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        *,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        access_token: str | None = None,
        authenticated: bool = True,
    ) -> GatewayOutcome:
        """Send one request and classify its outcome.

        Args:
            endpoint: Path relative to the API base URL, e.g. ``/slots/``
            method: HTTP verb
            body: Mapping/list sent as JSON, ``bytes``/``str`` sent verbatim,
                or form fields when ``files`` is given
            headers: Caller headers, merged over the defaults
            params: Query string parameters
            files: Multipart file fields
            access_token: Token to attach instead of the stored one (replays)
            authenticated: Whether to attach an Authorization header at all

        Returns:
            The classified GatewayOutcome. Transport failures are returned as
            NETWORK_ERROR outcomes, never raised.
        """
        method = method.upper()
        token = (access_token or self._store.access_token) if authenticated else None
        request_headers = self._build_headers(token, headers)
        correlation_id = _parse_correlation_id(request_headers[CORRELATION_HEADER])

        request_kwargs: dict[str, Any] = {"headers": request_headers}
        if params:
            request_kwargs["params"] = dict(params)
        if files is not None:
            request_kwargs["files"] = files
            if body is not None:
                request_kwargs["data"] = body
        elif isinstance(body, (bytes, bytearray, str)):
            request_kwargs["content"] = body
        elif body is not None:
            request_kwargs["json"] = body

        outcome_fields = {
            "endpoint": endpoint,
            "method": method,
            "correlation_id": correlation_id,
        }

        try:
            response = await self._client.request(
                method, self._settings.build_url(endpoint), **request_kwargs
            )
        except httpx.TransportError as exc:
            logger.warning(
                "Request could not reach the server",
                endpoint=endpoint,
                method=method,
                correlation_id=str(correlation_id),
                error=repr(exc),
            )
            return GatewayOutcome(
                kind=OutcomeKind.NETWORK_ERROR, message=NETWORK_ERROR_MESSAGE, **outcome_fields
            )

        outcome = self._classify(response, token_present=token is not None, **outcome_fields)
        if not outcome.ok:
            logger.info(
                "Request returned non-success outcome",
                endpoint=endpoint,
                method=method,
                status_code=response.status_code,
                outcome=outcome.kind.value,
                correlation_id=str(correlation_id),
            )
        return outcome

    def _build_headers(
        self, token: str | None, headers: Mapping[str, str] | None
    ) -> dict[str, str]:
        merged = {"Accept": "application/json", CORRELATION_HEADER: str(uuid4())}
        if token:
            merged["Authorization"] = f"Bearer {token}"
        if headers:
            merged.update(headers)
        return merged

    def _classify(
        self, response: httpx.Response, *, token_present: bool, **fields: Any
    ) -> GatewayOutcome:
        status = response.status_code

        if response.is_success:
            if status == 204 or not response.content:
                return GatewayOutcome(kind=OutcomeKind.NO_CONTENT, status_code=status, **fields)
            try:
                data = response.json()
            except ValueError:
                return GatewayOutcome(
                    kind=OutcomeKind.INVALID_RESPONSE,
                    status_code=status,
                    message=INVALID_RESPONSE_MESSAGE,
                    **fields,
                )
            return GatewayOutcome(
                kind=OutcomeKind.SUCCESS, status_code=status, data=data, **fields
            )

        if status == 401:
            # Only a request that carried a token can have an expired session
            if token_present:
                return GatewayOutcome(kind=OutcomeKind.AUTH_EXPIRED, status_code=status, **fields)
            return GatewayOutcome(
                kind=OutcomeKind.UNAUTHENTICATED,
                status_code=status,
                message=_server_message(response),
                **fields,
            )
        if status == 403:
            return GatewayOutcome(
                kind=OutcomeKind.FORBIDDEN, status_code=status, message=FORBIDDEN_MESSAGE, **fields
            )
        if status == 404:
            return GatewayOutcome(
                kind=OutcomeKind.NOT_FOUND, status_code=status, message=NOT_FOUND_MESSAGE, **fields
            )
        if status >= 500:
            return GatewayOutcome(
                kind=OutcomeKind.SERVER_ERROR,
                status_code=status,
                message=SERVER_ERROR_MESSAGE,
                **fields,
            )
        return GatewayOutcome(
            kind=OutcomeKind.CLIENT_ERROR,
            status_code=status,
            message=_server_message(response),
            **fields,
        )


def _server_message(response: httpx.Response) -> str:
    """Pick ``detail`` or ``message`` from a JSON error body, else the reason phrase."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        for key in ("detail", "message"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value

    return response.reason_phrase or f"HTTP {response.status_code}"


def _parse_correlation_id(value: str) -> UUID:
    # Callers may pass their own correlation header; keep it if it is a UUID
    try:
        return UUID(value)
    except ValueError:
        return uuid4()
