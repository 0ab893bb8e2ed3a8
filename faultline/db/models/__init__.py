"""Model module imports for SQLAlchemy metadata registration."""

from faultline.db.models.user import User

__all__ = [
    "User",
]
