"""Database engine and session management."""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from hostel_app.config.settings import Settings

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the engine and session factory for one relational store.

    Instances are built explicitly and handed to the components that need
    them; call ``dispose()`` on shutdown to release pooled connections.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any):
        self.url = url
        self.engine: Engine = create_engine(url, echo=echo, **engine_kwargs)
        self.session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create a pooled database from application settings."""
        url = settings.get_database_url()
        kwargs: Dict[str, Any] = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_POOL_OVERFLOW,
                connect_args=settings.DB_CONNECT_ARGS,
            )
        return cls(url, echo=settings.DB_ECHO, **kwargs)

    def session(self) -> Session:
        return self.session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Yield a session that is always closed afterwards."""
        session = self.session_factory()
        try:
            yield session
        finally:
            session.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connection pool disposed")


def get_db_session(database: Database) -> Generator[Session, None, None]:
    """
    Yield a database session bound to the given database.

    Usage in FastAPI dependencies: ``yield from get_db_session(context.database)``.
    """
    with database.session_scope() as db:
        yield db
