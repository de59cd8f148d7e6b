from app.db import db_manager


def db_session():
    """Shortcut for `db_manager.db_session()`."""
    return db_manager.db_session()
