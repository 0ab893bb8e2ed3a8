"""Repository primitives for user entities."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from faultline.db.models.user import User


def create_user(session: Session, *, email: str, username: str, full_name: str | None = None) -> User:
    """Create and return a user row."""
    user = User(email=email, username=username, full_name=full_name)
    session.add(user)
    session.flush()
    session.refresh(user)
    return user


def get_user(session: Session, user_id: UUID) -> User | None:
    """Fetch a user by id."""
    return session.get(User, user_id)


def delete_user(session: Session, user: User) -> None:
    session.delete(user)
    session.flush()
