# records_api/database.py
from sqlmodel import SQLModel, create_engine, Session

from records_api.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Engine
#
# - SQLite (local dev / tests): allow the connection to be used from
#   FastAPI's threadpool workers (check_same_thread=False).
# - Anything else (Postgres in production): validate pooled connections
#   before use (pool_pre_ping=True).
# ---------------------------------------------------------

db_url = settings.DATABASE_URL

if db_url.startswith("sqlite"):
    engine = create_engine(
        db_url,
        echo=settings.DB_ECHO,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        db_url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
    )


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
