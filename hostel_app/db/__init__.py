from hostel_app.db.base import Base
from hostel_app.db.init_db import drop_db, init_db
from hostel_app.db.session import Database, get_db_session

__all__ = ["Base", "Database", "get_db_session", "init_db", "drop_db"]
