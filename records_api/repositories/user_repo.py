# records_api/repositories/user_repo.py
from sqlmodel import Session, select

from records_api.models.user import User
from records_api.repositories.base import SoftDeleteRepository, active


class UserRepository(SoftDeleteRepository[User]):
    """Data access layer for User."""

    model = User
    label = "User"
    unique_field = "email"

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return the live User with this email, or None."""
        stmt = active(select(User).where(User.email == email), User)
        return session.exec(stmt).first()
