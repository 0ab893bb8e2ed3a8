"""Assemble immutable response records from classifier output."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from datetime import timezone

from faultline.core.exceptions import ErrorMessage
from faultline.handling.classifier import Classification
from faultline.handling.classifier import ClassifiedValidation
from faultline.schemas.error import ErrorInfo
from faultline.schemas.error import ValidationErrorInfo


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ResponseBuilder:
    """Stamp classifications with capture time and request path."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock

    def build(self, classified: Classification, path: str | None) -> ErrorInfo | ValidationErrorInfo:
        timestamp = self._clock()
        if isinstance(classified, ClassifiedValidation):
            return ValidationErrorInfo(
                timestamp=timestamp,
                status=classified.status,
                kind=classified.kind,
                errors=list(classified.errors),
            )
        return ErrorInfo(
            timestamp=timestamp,
            status=classified.status,
            kind=classified.kind,
            message=classified.message or ErrorMessage.GLOBAL_ERROR.default_message,
            path=path or "",
        )
