"""Navigator implementations for non-browser presentation layers."""

from __future__ import annotations

from smartparking_gateway.protocols import NavigatorProtocol


class InMemoryNavigator(NavigatorProtocol):
    """Tracks the current view and every navigation made."""

    def __init__(self, initial_path: str = "/") -> None:
        self._current_path = initial_path
        self.history: list[str] = []

    @property
    def current_path(self) -> str:
        return self._current_path

    def navigate(self, path: str) -> None:
        self.history.append(path)
        self._current_path = path
