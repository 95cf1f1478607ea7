"""Login, registration and logout on top of the refresh-aware pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from smartparking_gateway.config import GatewaySettings
from smartparking_gateway.credential_store import CredentialStore
from smartparking_gateway.error_handling import (
    GatewayError,
    raise_for_outcome,
    raise_invalid_response,
)
from smartparking_gateway.logging_utils import create_gateway_logger
from smartparking_gateway.models import GatewayOutcome, Identity, SessionPayload
from smartparking_gateway.protocols import NavigatorProtocol
from smartparking_gateway.refresh_coordinator import RefreshCoordinator

logger = create_gateway_logger("smartparking_gateway.session_controller")


class SessionController:
    """Owns the session lifecycle.

    Registers ``force_logout`` as the coordinator's session-expired handler,
    so a failed refresh always ends here.
    """

    def __init__(
        self,
        coordinator: RefreshCoordinator,
        credential_store: CredentialStore,
        navigator: NavigatorProtocol,
        settings: GatewaySettings,
    ) -> None:
        self._coordinator = coordinator
        self._store = credential_store
        self._navigator = navigator
        self._settings = settings
        coordinator.on_session_expired = self.force_logout

    @property
    def current_user(self) -> Identity | None:
        return self._store.identity

    def is_authenticated(self) -> bool:
        return self._store.credential is not None and self._store.identity is not None

    async def login(self, credentials: Mapping[str, Any]) -> Any:
        """Log in and install the returned credential and identity.

        Returns:
            The server payload, unmodified.
        """
        outcome = await self._post(self._settings.LOGIN_PATH, credentials)
        response = raise_for_outcome(outcome, "login")
        payload = self._parse_session_payload(response, outcome, "login")

        credential = payload.credential()
        if credential is not None or payload.user is not None:
            self._store.establish(credential, payload.user)
            logger.info("Session established", user_id=self._user_id(payload))
        return response

    async def register(self, user_data: Mapping[str, Any]) -> Any:
        """Register; a session is established only if tokens and user both come back."""
        outcome = await self._post(self._settings.REGISTER_PATH, user_data)
        response = raise_for_outcome(outcome, "register")
        payload = self._parse_session_payload(response, outcome, "register")

        credential = payload.credential()
        if credential is not None and payload.user is not None:
            self._store.establish(credential, payload.user)
            logger.info("Session established after registration", user_id=self._user_id(payload))
        return response

    async def logout(self) -> None:
        try:
            outcome = await self._post(self._settings.LOGOUT_PATH, None)
            raise_for_outcome(outcome, "logout")
        except GatewayError as error:
            logger.warning(
                "Logout API call failed, clearing local data anyway",
                error_code=error.error_code,
                correlation_id=error.correlation_id,
            )
        except httpx.HTTPError as exc:
            logger.warning(
                "Logout request could not be completed, clearing local data anyway",
                error=repr(exc),
            )
        finally:
            self._store.clear()

    def force_logout(self) -> None:
        """Wipe the session and send the user to the login view unless already there."""
        self._store.clear()
        login_path = self._settings.LOGIN_VIEW_PATH
        if self._navigator.current_path != login_path:
            logger.info("Redirecting to login view", path=login_path)
            self._navigator.navigate(login_path)

    async def _post(self, endpoint: str, body: Mapping[str, Any] | None) -> GatewayOutcome:
        return await self._coordinator.execute(
            endpoint, "POST", dict(body) if body is not None else None
        )

    @staticmethod
    def _parse_session_payload(
        response: Any, outcome: GatewayOutcome, operation: str
    ) -> SessionPayload:
        if not isinstance(response, dict):
            return SessionPayload()
        try:
            return SessionPayload.model_validate(response)
        except ValidationError as exc:
            raise_invalid_response(
                operation,
                "Session payload did not match the expected shape.",
                outcome.correlation_id,
                endpoint=outcome.endpoint,
                error_count=exc.error_count(),
            )

    @staticmethod
    def _user_id(payload: SessionPayload) -> str | None:
        return str(payload.user.id) if payload.user is not None else None
