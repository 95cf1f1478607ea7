"""Single-flight credential refresh and bounded replay.

When any number of concurrent calls see an expired access token, exactly one
refresh call is made. Callers arriving while it is in flight park on a
future; all of them are released together when the refresh settles. Each
caller replays its own request at most once.

Everything runs on one asyncio loop, and RefreshState is only mutated
between await points, so no lock is needed. A multi-threaded port must guard
the check-and-set of ``refreshing`` with a mutex.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID, uuid4

from pydantic import ValidationError

from smartparking_gateway.config import GatewaySettings
from smartparking_gateway.credential_store import CredentialStore
from smartparking_gateway.error_handling import (
    GatewayError,
    create_session_expired_error,
    raise_session_expired,
)
from smartparking_gateway.logging_utils import create_gateway_logger
from smartparking_gateway.models import GatewayOutcome, OutcomeKind, RefreshResponse
from smartparking_gateway.request_gateway import RequestGateway

logger = create_gateway_logger("smartparking_gateway.refresh_coordinator")

REPLAY_REJECTED_MESSAGE = "Authentication failed with a freshly refreshed token."
SESSION_CLEARED_REASON = "session_cleared"


@dataclass
class RefreshState:
    """``refreshing`` is true iff a refresh call is in flight; ``pending`` only fills meanwhile."""

    refreshing: bool = False
    pending: list[asyncio.Future[str]] = field(default_factory=list)


class RefreshCoordinator:
    def __init__(
        self,
        gateway: RequestGateway,
        credential_store: CredentialStore,
        settings: GatewaySettings,
        on_session_expired: Callable[[], None] | None = None,
    ) -> None:
        self._gateway = gateway
        self._store = credential_store
        self._settings = settings
        self.state = RefreshState()
        # Set by SessionController; called once per failed refresh
        self.on_session_expired = on_session_expired

    async def execute(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        *,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> GatewayOutcome:
        """Issue a request, refreshing and replaying it once on an expired token.

        Returns:
            The outcome of the first attempt, or of the single replay.

        Raises:
            GatewayError: SESSION_EXPIRED when the refresh fails.
        """
        # issue() reads the stored token before its first await
        sent_token = self._store.access_token
        outcome = await self._gateway.issue(
            endpoint, method, body, headers, params=params, files=files
        )
        if outcome.kind is not OutcomeKind.AUTH_EXPIRED:
            return outcome

        current_token = self._store.access_token
        if current_token and current_token != sent_token:
            # A refresh completed while this request was in flight
            logger.debug(
                "Stale token already replaced, replaying without refresh",
                endpoint=endpoint,
                correlation_id=str(outcome.correlation_id),
            )
            access_token = current_token
        else:
            access_token = await self.coordinate()

        replay = await self._gateway.issue(
            endpoint,
            method,
            body,
            headers,
            params=params,
            files=files,
            access_token=access_token,
        )
        if replay.kind is OutcomeKind.AUTH_EXPIRED:
            logger.warning(
                "Replay rejected with refreshed token",
                endpoint=endpoint,
                method=replay.method,
                correlation_id=str(replay.correlation_id),
            )
            return replay.model_copy(
                update={"kind": OutcomeKind.UNAUTHENTICATED, "message": REPLAY_REJECTED_MESSAGE}
            )
        return replay

    async def coordinate(self) -> str:
        """Return a fresh access token, sharing one refresh call among all callers.

        Raises:
            GatewayError: SESSION_EXPIRED, raised identically to every waiting caller.
        """
        if self.state.refreshing:
            waiter: asyncio.Future[str] = asyncio.get_running_loop().create_future()
            self.state.pending.append(waiter)
            logger.debug("Refresh in flight, queueing caller", queued=len(self.state.pending))
            return await waiter

        self.state.refreshing = True
        correlation_id = uuid4()
        try:
            access_token = await self._refresh(correlation_id)
        except GatewayError as error:
            self._release(error=error)
            reason = error.error_detail.details.get("reason")
            if reason == SESSION_CLEARED_REASON:
                # The session already ended elsewhere; nothing left to log out
                logger.info(
                    "Session ended during refresh, discarding refreshed credential",
                    correlation_id=str(correlation_id),
                )
                raise
            logger.warning(
                "Credential refresh failed, forcing logout",
                correlation_id=str(correlation_id),
                reason=reason,
            )
            if self.on_session_expired is not None:
                self.on_session_expired()
            raise
        else:
            self._release(access_token=access_token)
            logger.info("Credential refreshed", correlation_id=str(correlation_id))
            return access_token
        finally:
            if self.state.refreshing:
                # Cancelled or crashed mid-refresh: nobody may stay parked
                self._release(
                    error=create_session_expired_error(
                        "coordinate", correlation_id, reason="refresh_aborted"
                    )
                )

    async def _refresh(self, correlation_id: UUID) -> str:
        refreshed_from = self._store.credential
        refresh_token = refreshed_from.refresh_token if refreshed_from else None
        if not refresh_token:
            raise_session_expired("refresh", correlation_id, reason="missing_refresh_token")

        outcome = await self._gateway.issue(
            self._settings.REFRESH_PATH,
            "POST",
            {"refresh": refresh_token},
            {"X-Correlation-ID": str(correlation_id)},
            authenticated=False,
        )
        if self._store.credential is not refreshed_from:
            # Logged out or logged in again while the refresh was in flight
            raise_session_expired("refresh", correlation_id, reason=SESSION_CLEARED_REASON)
        if outcome.kind is not OutcomeKind.SUCCESS:
            raise_session_expired(
                "refresh",
                correlation_id,
                reason=outcome.kind.value,
                status_code=outcome.status_code,
            )

        try:
            payload = RefreshResponse.model_validate(outcome.data)
        except ValidationError:
            raise_session_expired("refresh", correlation_id, reason="malformed_payload")

        credential = self._store.rotate(payload.access, payload.refresh)
        return credential.access_token

    def _release(
        self, *, access_token: str | None = None, error: GatewayError | None = None
    ) -> None:
        """Settle every parked caller, then return to idle. Runs without awaiting."""
        pending, self.state.pending = self.state.pending, []
        for waiter in pending:
            if waiter.done():
                continue
            if error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(access_token)
        self.state.refreshing = False
