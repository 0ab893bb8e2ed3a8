"""Domain fault hierarchy and curated error messages for the management API."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING

from fastapi import status

if TYPE_CHECKING:
    from faultline.handling.fields import FieldFailure


class ErrorMessage(Enum):
    """Curated errors produced by the translation layer itself."""

    ACCESS_DENIED = (status.HTTP_401_UNAUTHORIZED, "access_denied", "access.denied", "Access denied")
    GLOBAL_JSON_INVALID_FORMAT = (
        status.HTTP_400_BAD_REQUEST,
        "invalid_format",
        "global.json.invalid.format",
        "Invalid JSON format",
    )
    EMAIL_ALREADY_EXISTS = (
        status.HTTP_400_BAD_REQUEST,
        "email_already_exists",
        "user.email.already.exists",
        "Email already exists",
    )
    USERNAME_ALREADY_EXISTS = (
        status.HTTP_400_BAD_REQUEST,
        "username_already_exists",
        "user.username.already.exists",
        "Username already exists",
    )
    GLOBAL_RESOURCE_NOT_FOUND = (
        status.HTTP_400_BAD_REQUEST,
        "resource_not_found",
        "global.resource.not.found",
        "Resource not found",
    )
    GLOBAL_ROUTE_NOT_FOUND = (
        status.HTTP_404_NOT_FOUND,
        "not_found",
        "global.route.not.found",
        "Resource not found",
    )
    GLOBAL_BAD_REQUEST = (
        status.HTTP_400_BAD_REQUEST,
        "bad_request",
        "global.bad.request",
        "Bad request",
    )
    GLOBAL_ERROR = (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "global.error",
        "Internal server error",
    )

    def __init__(self, status_code: int, kind: str, key: str, default_message: str) -> None:
        self.status_code = status_code
        self.kind = kind
        self.key = key
        self.default_message = default_message


class ApiError(Exception):
    """Base class for domain faults with a policy-mapped HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind: str = "api_error"
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None, *, message_key: str | None = None) -> None:
        self.message = message or self.default_message
        self.message_key = message_key
        super().__init__(self.message)


class NotFoundError(ApiError):
    """Raised when a requested resource does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"
    default_message = "Resource not found"


class ServerError(ApiError):
    """Raised when the service knows it cannot complete a request."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind = "server_error"
    default_message = "Server error"


class BadRequestError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "bad_request"
    default_message = "Bad request"


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    kind = "unauthorized"
    default_message = "Unauthorized"


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    kind = "forbidden"
    default_message = "Forbidden"


class AccessDeniedError(Exception):
    """Raised by authorization guards when a caller lacks access."""


class MalformedBodyError(Exception):
    """Raised when a request body cannot be read or decoded.

    FastAPI reports undecodable JSON bodies itself; this is the hook for
    routes that read ``request.body()`` or stream uploads directly.
    """


class FieldValidationError(Exception):
    """Bind-style validation failure carrying ordered per-field failures.

    Raised by services for business rules that are checked after schema
    validation, such as reserved usernames.
    """

    def __init__(self, object_name: str, failures: Sequence[FieldFailure]) -> None:
        super().__init__(f"Validation failed for {object_name} with {len(failures)} error(s)")
        self.object_name = object_name
        self.failures = list(failures)
