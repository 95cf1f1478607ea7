"""Holder of the current credential pair and identity.

State is restored from the key-value store on construction and written
through on every change. Absence of the keys means "logged out".
"""

from __future__ import annotations

from pydantic import ValidationError

from smartparking_gateway.logging_utils import create_gateway_logger
from smartparking_gateway.models import Credential, Identity
from smartparking_gateway.protocols import KeyValueStoreProtocol

logger = create_gateway_logger("smartparking_gateway.credential_store")

ACCESS_TOKEN_KEY = "authToken"
REFRESH_TOKEN_KEY = "refreshToken"
USER_KEY = "user"


class CredentialStore:
    def __init__(self, storage: KeyValueStoreProtocol) -> None:
        self._storage = storage
        self._credential: Credential | None = None
        self._identity: Identity | None = None
        self._restore()

    @property
    def credential(self) -> Credential | None:
        return self._credential

    @property
    def identity(self) -> Identity | None:
        return self._identity

    @property
    def access_token(self) -> str | None:
        return self._credential.access_token if self._credential else None

    @property
    def refresh_token(self) -> str | None:
        return self._credential.refresh_token if self._credential else None

    def establish(self, credential: Credential | None, identity: Identity | None) -> None:
        """Install a login/register result; parts that are None are left as they were."""
        values: dict[str, str | None] = {}
        if credential is not None:
            self._credential = credential
            values.update(_credential_values(credential))
        if identity is not None:
            self._identity = identity
            values[USER_KEY] = identity.model_dump_json()
        if values:
            self._storage.update(values)

    def rotate(self, access_token: str, refresh_token: str | None = None) -> Credential:
        """Swap in a refreshed pair, keeping the current refresh token unless rotated."""
        credential = Credential(
            access_token=access_token,
            refresh_token=refresh_token or self.refresh_token,
        )
        self._credential = credential
        self._storage.update(_credential_values(credential))
        return credential

    def clear(self) -> None:
        self._credential = None
        self._identity = None
        self._storage.update({ACCESS_TOKEN_KEY: None, REFRESH_TOKEN_KEY: None, USER_KEY: None})

    def _restore(self) -> None:
        access_token = self._storage.read(ACCESS_TOKEN_KEY)
        if access_token:
            self._credential = Credential(
                access_token=access_token,
                refresh_token=self._storage.read(REFRESH_TOKEN_KEY),
            )

        raw_user = self._storage.read(USER_KEY)
        if raw_user:
            try:
                self._identity = Identity.model_validate_json(raw_user)
            except ValidationError:
                logger.warning("Discarding unreadable persisted identity")


def _credential_values(credential: Credential) -> dict[str, str | None]:
    # Both keys go out in one storage update so the pair never lands half-written
    return {
        ACCESS_TOKEN_KEY: credential.access_token,
        REFRESH_TOKEN_KEY: credential.refresh_token or None,
    }
