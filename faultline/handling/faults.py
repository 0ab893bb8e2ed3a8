"""Closed set of fault variants the classifier dispatches on."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import json

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from faultline.core.exceptions import AccessDeniedError
from faultline.core.exceptions import ApiError
from faultline.core.exceptions import BadRequestError
from faultline.core.exceptions import FieldValidationError
from faultline.core.exceptions import ForbiddenError
from faultline.core.exceptions import MalformedBodyError
from faultline.core.exceptions import NotFoundError
from faultline.core.exceptions import ServerError
from faultline.core.exceptions import UnauthorizedError
from faultline.handling.fields import FieldFailure
from faultline.handling.fields import failures_from_issues

# First match wins, so subclasses of a category keep the category's status.
DOMAIN_CATEGORIES: tuple[type[ApiError], ...] = (
    NotFoundError,
    ServerError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
)

JSON_INVALID_TYPE = "json_invalid"


class ValidationSource(str, Enum):
    """Where a validation failure came from; the value is the response kind."""

    BIND = "bind_error"
    ARGUMENT = "argument_not_valid"


@dataclass(frozen=True)
class DomainFault:
    error: ApiError
    status: int


@dataclass(frozen=True)
class AccessDeniedFault:
    error: BaseException


@dataclass(frozen=True)
class TransportFault:
    error: BaseException


@dataclass(frozen=True)
class PersistenceFault:
    error: BaseException
    detail: str


@dataclass(frozen=True)
class ValidationFault:
    source: ValidationSource
    failures: tuple[FieldFailure, ...]


@dataclass(frozen=True)
class RoutingFault:
    """Framework-raised 4xx such as an unknown route or a wrong method."""

    error: BaseException
    status_code: int


@dataclass(frozen=True)
class UnclassifiedFault:
    error: BaseException


Fault = (
    DomainFault
    | AccessDeniedFault
    | TransportFault
    | PersistenceFault
    | ValidationFault
    | RoutingFault
    | UnclassifiedFault
)


def _domain_status(error: ApiError) -> int | None:
    for category in DOMAIN_CATEGORIES:
        if isinstance(error, category):
            return category.status_code
    return None


def _request_validation_fault(error: RequestValidationError) -> Fault:
    issues = list(error.errors())
    if any(issue.get("type") == JSON_INVALID_TYPE for issue in issues):
        return TransportFault(error=error)

    source = ValidationSource.BIND
    for issue in issues:
        location = issue.get("loc") or ()
        if location and location[0] == "body":
            source = ValidationSource.ARGUMENT
            break
    return ValidationFault(source=source, failures=tuple(failures_from_issues(issues)))


def _http_fault(error: StarletteHTTPException) -> Fault:
    if error.status_code in (401, 403):
        return AccessDeniedFault(error=error)
    if error.status_code >= 500:
        return UnclassifiedFault(error=error)
    return RoutingFault(error=error, status_code=error.status_code)


def to_fault(error: BaseException) -> Fault:
    """Sort a raised exception into exactly one fault variant."""
    if isinstance(error, ApiError):
        status = _domain_status(error)
        if status is None:
            return UnclassifiedFault(error=error)
        return DomainFault(error=error, status=status)
    if isinstance(error, AccessDeniedError):
        return AccessDeniedFault(error=error)
    if isinstance(error, (MalformedBodyError, json.JSONDecodeError)):
        return TransportFault(error=error)
    if isinstance(error, RequestValidationError):
        return _request_validation_fault(error)
    if isinstance(error, FieldValidationError):
        return ValidationFault(source=ValidationSource.BIND, failures=tuple(error.failures))
    if isinstance(error, PydanticValidationError):
        failures = failures_from_issues(error.errors(), object_name=error.title)
        return ValidationFault(source=ValidationSource.BIND, failures=tuple(failures))
    if isinstance(error, IntegrityError):
        # The driver message carries the constraint text; str(error) also embeds the SQL.
        detail = str(error.orig) if error.orig is not None else str(error)
        return PersistenceFault(error=error, detail=detail)
    if isinstance(error, StarletteHTTPException):
        return _http_fault(error)
    return UnclassifiedFault(error=error)
