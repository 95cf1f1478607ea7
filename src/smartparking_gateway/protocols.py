"""
Protocols for the SmartParking gateway.

The core depends on these seams, not on concrete persistence or presentation
implementations.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class KeyValueStoreProtocol(Protocol):
    """Durable string key-value storage for session data."""

    def read(self, key: str) -> str | None:
        """Return the stored value, or None when the key is absent."""
        ...

    def write(self, key: str, value: str) -> None:
        """Store a value under key, replacing any previous value."""
        ...

    def clear(self, key: str) -> None:
        """Remove key. Removing an absent key is a no-op."""
        ...

    def update(self, values: Mapping[str, str | None]) -> None:
        """Apply several writes in one step; a None value removes that key."""
        ...


class NavigatorProtocol(Protocol):
    """Presentation-layer hook used to send the user to another view."""

    @property
    def current_path(self) -> str:
        """Path of the view currently shown."""
        ...

    def navigate(self, path: str) -> None:
        """Show the view at path."""
        ...
