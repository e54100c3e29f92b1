# records_api/core/auth.py
import logging
from typing import Any

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from records_api.core.errors import (
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from records_api.core.security import decode_access_token
from records_api.database import get_session
from records_api.models.user import User
from records_api.repositories.base import SoftDeleteRepository
from records_api.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

# HTTP Bearer scheme:
# - auto_error=False => a missing Authorization header does NOT raise
#   FastAPI's own 403, so we can answer 401 with our error envelope.
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()


def get_token_payload(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any]:
    """
    Extract and verify the bearer token.

    Raises:
        UnauthorizedError(401): no bearer token was sent.
        ForbiddenError(403): the token is invalid or expired.
    """
    if credentials is None:
        raise UnauthorizedError("Unauthorized")
    return decode_access_token(credentials.credentials)


def get_current_user(
    payload: dict[str, Any] = Depends(get_token_payload),
    session: Session = Depends(get_session),
) -> User:
    """
    Resolve the acting user from the token's "sub" claim.

    The user is re-read on every request, so admin status and permission
    changes apply immediately. A token that names a missing or soft-deleted
    user is denied with 403.
    """
    sub = payload.get("sub")
    try:
        return user_repo.get_by_id(session, sub)
    except (InvalidInputError, NotFoundError):
        logger.warning("Access denied (unknown_user): sub=%s", sub)
        raise ForbiddenError("Unauthorized")


def _log_access_denied(*, reason: str, user: User, permission: str | None, request: Request) -> None:
    logger.warning(
        "Access denied (%s): user_id=%s permission=%s endpoint=%s %s",
        reason,
        user.id,
        permission,
        request.method,
        request.url.path,
    )


def _owns(user: User, resource: Any) -> bool:
    """A resource is owned when it *is* the user or references the user."""
    return resource.id == user.id or getattr(resource, "user_id", None) == user.id


def scope(
    permission: str | None = None,
    repo: SoftDeleteRepository | None = None,
    id_param: str | None = None,
):
    """
    Build a dependency that gates a route.

    Evaluation order:
      1. admins are always allowed;
      2. users holding `permission` are allowed when no `repo` is given, or
         when the resource loaded through `repo` by path parameter
         `id_param` is theirs (its id or its user_id equals theirs);
      3. everyone else gets a uniform 403 "Unauthorized".

    Without a permission the route is admin only. The dependency returns
    the acting User.

    Usage:

        @router.get("/{customer_id}")
        def get_customer(
            customer_id: str,
            current_user: User = Depends(
                scope("customer:read", customer_repo, "customer_id")
            ),
        ):
            ...
    """
    if repo is not None and id_param is None:
        raise ValueError("id_param is required when an ownership repo is given")

    def _dependency(
        request: Request,
        session: Session = Depends(get_session),
        user: User = Depends(get_current_user),
    ) -> User:
        if user.is_admin:
            return user

        if permission is None or permission not in (user.permissions or []):
            _log_access_denied(
                reason="missing_permission",
                user=user,
                permission=permission,
                request=request,
            )
            raise ForbiddenError("Unauthorized")

        if repo is None:
            return user

        # Invalid ids still surface as 400; a miss must look like any denial.
        try:
            resource = repo.get_by_id(session, request.path_params.get(id_param))
        except NotFoundError:
            resource = None

        if resource is not None and _owns(user, resource):
            return user

        _log_access_denied(
            reason="not_owner",
            user=user,
            permission=permission,
            request=request,
        )
        raise ForbiddenError("Unauthorized")

    return _dependency
