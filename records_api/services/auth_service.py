# records_api/services/auth_service.py
import logging

from sqlmodel import Session

from records_api.core.config import get_settings
from records_api.core.errors import UnauthorizedError
from records_api.core.security import create_access_token, hash_password, verify_password
from records_api.models.user import User
from records_api.repositories.user_repo import UserRepository
from records_api.schemas.user import LoginBody, RegisterBody

logger = logging.getLogger(__name__)


class AuthService:
    """
    Registration and login.

    Responsibilities:
      - hash passwords before they reach the repository
      - apply default permissions to new users
      - exchange valid credentials for an access token
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def register(self, session: Session, payload: RegisterBody) -> User:
        """
        Create a user (the route is admin only).

        Raises:
            ConflictError(409): a live user already has this email.
        """
        permissions = payload.permissions
        if permissions is None:
            permissions = list(get_settings().DEFAULT_PERMISSIONS)

        user = User(
            **payload.model_dump(exclude={"password", "permissions"}),
            password=hash_password(payload.password),
            permissions=permissions,
        )
        created = self.repo.create(session, user)
        logger.info("Registered user_id=%s", created.id)
        return created

    def login(self, session: Session, payload: LoginBody) -> tuple[User, str]:
        """
        Verify credentials and issue a token.

        Unknown email and wrong password produce the same error.

        Raises:
            UnauthorizedError(401): credentials do not match a live user.
        """
        user = self.repo.get_by_email(session, payload.email)
        if user is None or not verify_password(payload.password, user.password):
            raise UnauthorizedError("Invalid email or password")

        return user, create_access_token(user.id)
