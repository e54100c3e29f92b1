# records_api/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from records_api.core.auth import get_current_user, scope
from records_api.database import get_session
from records_api.models.user import User
from records_api.repositories.user_repo import UserRepository
from records_api.schemas.user import (
    LoginBody,
    LoginResponse,
    RegisterBody,
    UserActionResponse,
    UserResponse,
)
from records_api.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = UserRepository()
service = AuthService(repo)


@router.get("", response_model=UserResponse)
def verify(current_user: User = Depends(get_current_user)):
    """
    Return the profile of the token's owner.

    Auth:
      - 401 without a bearer token, 403 for an invalid/expired token or a
        user that no longer exists.
    """
    return {"user": current_user}


@router.post(
    "/register",
    response_model=UserActionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(scope())],
)
def register(
    payload: RegisterBody,
    session: Session = Depends(get_session),
):
    """
    Create a new user (admin only).
    """
    user = service.register(session, payload)
    return {"message": "User registered successfully", "user": user}


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginBody,
    session: Session = Depends(get_session),
):
    """
    Exchange email + password for a 1 hour access token.
    """
    user, token = service.login(session, payload)
    return {"message": "User logged in successfully", "user": user, "token": token}
