"""Map persistence-layer constraint failures to semantic conflict kinds.

The mapping is a case-sensitive substring match over the database driver's
error text, with ``email`` checked before ``username``. Anything else falls
back to a generic resource condition.
"""

from __future__ import annotations

from enum import Enum

from faultline.core.exceptions import ErrorMessage

EMAIL_MARKER = "email"
USERNAME_MARKER = "username"


class ConflictKind(Enum):
    EMAIL_ALREADY_EXISTS = ErrorMessage.EMAIL_ALREADY_EXISTS
    USERNAME_ALREADY_EXISTS = ErrorMessage.USERNAME_ALREADY_EXISTS
    RESOURCE_NOT_FOUND = ErrorMessage.GLOBAL_RESOURCE_NOT_FOUND

    @property
    def error_message(self) -> ErrorMessage:
        return self.value


def translate(detail: str | None) -> ConflictKind:
    """Return the conflict kind for a raw constraint failure detail."""
    detail = detail or ""
    if EMAIL_MARKER in detail:
        return ConflictKind.EMAIL_ALREADY_EXISTS
    if USERNAME_MARKER in detail:
        return ConflictKind.USERNAME_ALREADY_EXISTS
    return ConflictKind.RESOURCE_NOT_FOUND
