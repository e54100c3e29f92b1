# records_api/repositories/base.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, col, select

from records_api.core.errors import ConflictError, InvalidInputError, NotFoundError
from records_api.models.common import utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


def active(stmt, model: type[SQLModel], deleted: bool = False):
    """
    Restrict `stmt` to live rows (or, with deleted=True, to soft-deleted rows).

    Every query a repository issues goes through here.
    """
    column = col(model.deleted_at)
    return stmt.where(column.is_not(None) if deleted else column.is_(None))


def parse_id(raw: uuid.UUID | str | None) -> uuid.UUID:
    """Validate an identifier before it reaches the database."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError):
        raise InvalidInputError("Invalid id")


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SoftDeleteRepository(Generic[ModelT]):
    """
    Data access layer shared by all soft-deletable entities.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - Soft-delete filtering on every read/update/delete
      - Mapping unique-index violations to ConflictError
      - No FastAPI, no HTTP, no authorization
    """

    model: type[ModelT]
    label: str = "Record"
    # Column guarded by a live-rows unique index, used in conflict messages
    unique_field: str | None = None

    # ----- Reads -----

    def get_by_id(self, session: Session, record_id: uuid.UUID | str | None) -> ModelT:
        """
        Return a live row by primary key.

        Raises:
            InvalidInputError: if the id is not a UUID.
            NotFoundError: if the row does not exist or is soft-deleted.
        """
        pk = parse_id(record_id)
        stmt = active(select(self.model).where(col(self.model.id) == pk), self.model)
        record = session.exec(stmt).first()
        if record is None:
            raise NotFoundError(f"{self.label} not found")
        return record

    def list(
        self,
        session: Session,
        filters: dict[str, Any] | None = None,
        *,
        deleted: bool = False,
        name: str | None = None,
    ) -> list[ModelT]:
        """
        List rows matching `filters`.

        Args:
            filters: column -> value exact matches; None values are ignored.
            deleted: return only soft-deleted rows instead of live ones.
            name: case-insensitive substring match on the `name` column.
        """
        stmt = active(select(self.model), self.model, deleted=deleted)
        for field, value in (filters or {}).items():
            if value is not None:
                stmt = stmt.where(col(getattr(self.model, field)) == value)
        if name:
            stmt = stmt.where(
                col(getattr(self.model, "name")).ilike(_like_pattern(name), escape="\\")
            )
        stmt = stmt.order_by(col(self.model.created_at))
        return list(session.exec(stmt).all())

    # ----- Writes -----

    def create(self, session: Session, record: ModelT) -> ModelT:
        """Insert a new row and return the persisted record."""
        session.add(record)
        self._commit(session)
        session.refresh(record)
        return record

    def update(
        self,
        session: Session,
        record_id: uuid.UUID | str | None,
        changes: dict[str, Any],
    ) -> ModelT:
        """Apply `changes` to a live row."""
        record = self.get_by_id(session, record_id)
        for field, value in changes.items():
            setattr(record, field, value)
        record.updated_at = utcnow()
        session.add(record)
        self._commit(session)
        session.refresh(record)
        return record

    def soft_delete(self, session: Session, record_id: uuid.UUID | str | None) -> ModelT:
        """
        Mark a live row as deleted.

        Deleting twice fails with NotFoundError the second time.
        """
        record = self.get_by_id(session, record_id)
        now = utcnow()
        record.deleted_at = now
        record.updated_at = now
        session.add(record)
        self._commit(session)
        session.refresh(record)
        return record

    def _commit(self, session: Session) -> None:
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            logger.info("Unique constraint violated on %s: %s", self.label, exc.orig)
            field = self.unique_field or "value"
            raise ConflictError(f"{self.label} with that {field} already exists")
