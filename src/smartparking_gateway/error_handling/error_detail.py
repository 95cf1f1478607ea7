"""
Pure data model describing a gateway failure.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from smartparking_gateway.error_enums import GatewayErrorCode


class ErrorDetail(BaseModel):
    """
    The canonical data model for an error surfaced by the gateway.
    This model contains only data fields and no behavior.
    """

    error_code: GatewayErrorCode
    message: str
    correlation_id: UUID
    timestamp: datetime
    service: str
    operation: str
    details: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
