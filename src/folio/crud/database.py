"""Engine construction and schema initialization"""

from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

import folio.crud.tables  # noqa: F401  registers tables on SQLModel.metadata


def make_engine(db_url: str):
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(db_url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    if db_url.startswith("sqlite"):
        return create_engine(db_url, connect_args={"check_same_thread": False})
    return create_engine(db_url, pool_pre_ping=True)


def init_db(engine) -> None:
    """Create all tables that do not exist yet."""
    SQLModel.metadata.create_all(engine)


def reset_db(engine) -> None:
    """Drop and recreate all tables."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
