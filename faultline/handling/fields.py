"""Normalize per-field validation failures into ordered field errors."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from faultline.handling.messages import MessageResolver
from faultline.schemas.error import FieldError

DEFAULT_REASON = "invalid"
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


@dataclass(frozen=True)
class FieldFailure:
    """One failing field as reported by a validation source."""

    object_name: str
    field: str
    code: str
    default_message: str
    codes: tuple[str, ...] = ()


def failure_codes(code: str, object_name: str, field: str) -> tuple[str, ...]:
    """Build message codes from most to least specific."""
    codes: list[str] = []
    if field:
        codes.append(f"{code}.{object_name}.{field}")
        codes.append(f"{code}.{field}")
    codes.append(code)
    return tuple(dict.fromkeys(codes))


def failure_from_issue(issue: Mapping[str, Any], *, object_name: str | None = None) -> FieldFailure:
    """Adapt a pydantic/FastAPI error dict into a ``FieldFailure``."""
    location = issue.get("loc", ())
    if not isinstance(location, (tuple, list)):
        location = (location,)

    parts = [str(part) for part in location]
    if object_name is None:
        if parts and parts[0] in _LOCATION_PREFIXES:
            object_name = parts.pop(0)
        else:
            object_name = "request"
    field = ".".join(parts)

    code = str(issue.get("type") or DEFAULT_REASON)
    return FieldFailure(
        object_name=object_name,
        field=field,
        code=code,
        default_message=str(issue.get("msg") or ""),
        codes=failure_codes(code, object_name, field),
    )


def failures_from_issues(
    issues: Iterable[Mapping[str, Any]],
    *,
    object_name: str | None = None,
) -> list[FieldFailure]:
    return [failure_from_issue(issue, object_name=object_name) for issue in issues]


class FieldErrorAggregator:
    """Resolve each failing field's message and keep the source order."""

    def __init__(self, resolver: MessageResolver) -> None:
        self._resolver = resolver

    def aggregate(self, failures: Sequence[FieldFailure], locale: str | None) -> list[FieldError]:
        return [self._to_field_error(failure, locale) for failure in failures]

    def _to_field_error(self, failure: FieldFailure, locale: str | None) -> FieldError:
        reason = failure.code or DEFAULT_REASON

        message = None
        if failure.codes:
            message = self._resolver.resolve(failure.codes[0], locale)
        if not message:
            # Last resort keeps defaultMessage non-empty.
            message = failure.default_message or reason

        return FieldError(
            default_message=message,
            object_name=failure.object_name,
            field=failure.field,
            reason=reason,
        )
