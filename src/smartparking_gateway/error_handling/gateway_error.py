"""
Core exception raised for every classified gateway failure.
"""

from __future__ import annotations

from typing import Any

from smartparking_gateway.error_handling.error_detail import ErrorDetail


class GatewayError(Exception):
    """
    Exception carrying a structured ErrorDetail.

    The string form is ``[ERROR_CODE] message`` so CLI and log output stay
    readable, while callers branch on ``error_code``.
    """

    def __init__(self, error_detail: ErrorDetail) -> None:
        super().__init__(error_detail.message)
        self.error_detail = error_detail

    @property
    def error_code(self) -> str:
        return self.error_detail.error_code.value

    @property
    def message(self) -> str:
        return self.error_detail.message

    @property
    def correlation_id(self) -> str:
        return str(self.error_detail.correlation_id)

    @property
    def service(self) -> str:
        return self.error_detail.service

    @property
    def operation(self) -> str:
        return self.error_detail.operation

    @property
    def status_code(self) -> int | None:
        """HTTP status that produced the error, when there was a response."""
        return self.error_detail.details.get("status_code")

    def to_dict(self) -> dict[str, Any]:
        return self.error_detail.model_dump(mode="json")

    def add_detail(self, key: str, value: Any) -> GatewayError:
        """Return a new error with an extra detail; the original is left untouched."""
        new_details = {**self.error_detail.details, key: value}
        return GatewayError(self.error_detail.model_copy(update={"details": new_details}))

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"GatewayError(error_code={self.error_code!r}, message={self.message!r}, "
            f"correlation_id={self.correlation_id!r})"
        )
