"""Database initialization utilities."""
import logging

from hostel_app.db.base import Base, import_models
from hostel_app.db.session import Database

logger = logging.getLogger(__name__)


def init_db(database: Database) -> None:
    """
    Create all tables and indexes that do not exist yet.

    Note: This is suitable for development/testing only.
    """
    import_models()
    try:
        Base.metadata.create_all(bind=database.engine)
        logger.info("Database tables created/verified successfully")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def drop_db(database: Database) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    import_models()
    Base.metadata.drop_all(bind=database.engine)
    logger.warning("All database tables dropped")
