from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from .config import settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""


# For SQLite we need check_same_thread=False so the request thread pool can share it
engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {},
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, class_=Session)


def init_db(bind: Engine = engine) -> None:
    """
    Create the trade store tables if they do not exist yet.

    Models must be imported before `create_all` so that they are registered
    on `Base.metadata`.
    """
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=bind)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a read session for one request.

    The analytics endpoints never write, so the session is only closed
    (never committed) when the request is finished.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
