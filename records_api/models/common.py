# records_api/models/common.py
from datetime import datetime, timezone

from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Timestamps(SQLModel):
    """
    Lifecycle columns shared by every soft-deletable table.

    A row with `deleted_at` set is logically removed; nothing is ever
    physically deleted and there is no way back.
    """

    created_at: datetime = Field(
        default_factory=utcnow,
        description="Creation timestamp (UTC)",
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        description="Last modification timestamp (UTC)",
    )
    deleted_at: datetime | None = Field(
        default=None,
        index=True,
        description="Soft-delete marker; NULL while the record is live",
    )


def unique_while_live(name: str, *columns: str) -> Index:
    """
    Unique index that only covers live (non-deleted) rows.

    Both SQLite and PostgreSQL support partial indexes, so a soft-deleted
    row releases its key for reuse.
    """
    live = text("deleted_at IS NULL")
    return Index(
        name,
        *columns,
        unique=True,
        sqlite_where=live,
        postgresql_where=live,
    )
