# records_api/services/user_service.py
from sqlmodel import Session

from records_api.core.security import hash_password
from records_api.models.user import User
from records_api.repositories.user_repo import UserRepository
from records_api.schemas.user import UserUpdate
from records_api.services.common import reject_admin_only_fields

USER_ADMIN_ONLY_FIELDS = frozenset({"customers", "is_admin", "permissions"})


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - enforce admin-only fields on updates
      - rehash passwords on change
      - orchestrate repository operations

    Route-level access (admin / self) is decided by the `scope` guard
    before any of these methods run.
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def list_users(
        self,
        session: Session,
        name: str | None = None,
        deleted: bool = False,
    ) -> list[User]:
        return self.repo.list(session, deleted=deleted, name=name)

    def get_user(self, session: Session, user_id: str) -> User:
        return self.repo.get_by_id(session, user_id)

    def update_user(
        self,
        session: Session,
        current_user: User,
        user_id: str,
        payload: UserUpdate,
    ) -> User:
        """
        Partial update.

        Raises:
            ForbiddenError(403): a non-admin sent customers/is_admin/permissions.
            ConflictError(409): the new email belongs to another live user.
            NotFoundError(404): the user does not exist or is deleted.
        """
        changes = payload.model_dump(exclude_unset=True)
        reject_admin_only_fields(current_user, changes, USER_ADMIN_ONLY_FIELDS)

        if "password" in changes:
            changes["password"] = hash_password(changes["password"])
        if "customers" in changes:
            changes["customers"] = [str(c) for c in changes["customers"]]

        return self.repo.update(session, user_id, changes)

    def delete_user(self, session: Session, user_id: str) -> User:
        return self.repo.soft_delete(session, user_id)
