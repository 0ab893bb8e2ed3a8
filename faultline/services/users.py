"""Service helpers for user API operations."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from faultline.core.exceptions import FieldValidationError
from faultline.core.exceptions import NotFoundError
from faultline.db.repository.users import create_user
from faultline.db.repository.users import delete_user
from faultline.db.repository.users import get_user
from faultline.handling.fields import FieldFailure
from faultline.handling.fields import failure_codes
from faultline.schemas.user import UserCreate

RESERVED_USERNAMES = frozenset({"admin", "root", "system"})


def _check_username(username: str) -> None:
    if username.lower() in RESERVED_USERNAMES:
        failure = FieldFailure(
            object_name="user",
            field="username",
            code="reserved",
            default_message="Username is reserved",
            codes=failure_codes("reserved", "user", "username"),
        )
        raise FieldValidationError("user", [failure])


def create_user_service(session: Session, payload: UserCreate):
    """Create and persist a new user; uniqueness violations propagate after rollback."""
    _check_username(payload.username)
    try:
        user = create_user(
            session,
            email=payload.email,
            username=payload.username,
            full_name=payload.full_name,
        )
        session.commit()
        return user
    except IntegrityError:
        session.rollback()
        raise


def get_user_service(session: Session, user_id: UUID):
    """Fetch a user or raise not found."""
    user = get_user(session, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found", message_key="user.not.found")
    return user


def delete_user_service(session: Session, user_id: UUID) -> None:
    user = get_user_service(session, user_id)
    delete_user(session, user)
    session.commit()
