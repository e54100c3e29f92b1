# records_api/routers/users.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from records_api.core.auth import scope
from records_api.database import get_session
from records_api.models.user import User
from records_api.repositories.user_repo import UserRepository
from records_api.schemas.user import (
    UserActionResponse,
    UserListResponse,
    UserResponse,
    UserUpdate,
)
from records_api.services.user_service import UserService

router = APIRouter(prefix="/user", tags=["Users"])

repo = UserRepository()
service = UserService(repo)


@router.get(
    "",
    response_model=UserListResponse,
    dependencies=[Depends(scope())],
)
def list_users(
    session: Session = Depends(get_session),
    name: str | None = None,
    deleted: bool = False,
):
    """
    List users (admin only).

    - `name`: case-insensitive substring filter.
    - `deleted=true`: list soft-deleted users instead of live ones.
    """
    return {"users": service.list_users(session, name=name, deleted=deleted)}


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    session: Session = Depends(get_session),
    current_user: User = Depends(scope("user:read", repo, "user_id")),
):
    """
    Get a user by id (admin, or the user themself with `user:read`).
    """
    return {"user": service.get_user(session, user_id)}


@router.patch("/{user_id}", response_model=UserActionResponse)
def update_user(
    user_id: str,
    payload: UserUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(scope("user:update", repo, "user_id")),
):
    """
    Partially update a user (admin, or self with `user:update`).

    customers / is_admin / permissions are admin only.
    """
    user = service.update_user(session, current_user, user_id, payload)
    return {"message": "User updated", "user": user}


@router.delete("/{user_id}", response_model=UserActionResponse)
def delete_user(
    user_id: str,
    session: Session = Depends(get_session),
    current_user: User = Depends(scope("user:delete", repo, "user_id")),
):
    """
    Soft-delete a user (admin, or self with `user:delete`).
    """
    user = service.delete_user(session, user_id)
    return {"message": "User deleted", "user": user}
