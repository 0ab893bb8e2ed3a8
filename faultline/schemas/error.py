"""Error response schemas shared across API handlers."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class FieldError(BaseModel):
    """Single failing-field entry within a validation response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    default_message: str = Field(min_length=1, alias="defaultMessage")
    object_name: str = Field(alias="objectName")
    field: str
    reason: str = Field(min_length=1)


class ErrorInfo(BaseModel):
    """Single-error response payload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: datetime
    status: int
    kind: str = Field(alias="exception")
    message: str = Field(min_length=1)
    path: str = ""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ValidationErrorInfo(BaseModel):
    """Multi-field validation response payload."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: datetime
    status: int = 400
    kind: str = Field(alias="exception")
    errors: list[FieldError]

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
