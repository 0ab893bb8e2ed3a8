"""User API routes."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Response
from sqlalchemy.orm import Session

from faultline.api.deps import require_api_key
from faultline.db.base import get_db_session
from faultline.schemas.user import User
from faultline.schemas.user import UserCreate
from faultline.services.users import create_user_service
from faultline.services.users import delete_user_service
from faultline.services.users import get_user_service

router = APIRouter(prefix="/api/v1", tags=["users"], dependencies=[Depends(require_api_key)])


@router.post("/users", response_model=User, status_code=201)
def create_user_endpoint(
    payload: UserCreate,
    session: Session = Depends(get_db_session),
) -> User:
    """Create a user."""
    return create_user_service(session, payload)


@router.get("/users/{user_id}", response_model=User)
def get_user_endpoint(
    user_id: UUID,
    session: Session = Depends(get_db_session),
) -> User:
    """Get a single user by id."""
    return get_user_service(session, user_id)


@router.delete("/users/{user_id}", status_code=204)
def delete_user_endpoint(
    user_id: UUID,
    session: Session = Depends(get_db_session),
) -> Response:
    """Delete a user."""
    delete_user_service(session, user_id)
    return Response(status_code=204)
