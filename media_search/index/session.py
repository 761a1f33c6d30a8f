"""Index database session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from media_search.exceptions import IndexNotFoundError
from media_search.index.models import IndexBase

log = logging.getLogger(__name__)


def get_index_engine(db_path: Path) -> Engine:
    """Create SQLAlchemy engine for the index database.

    Args:
        db_path: Path to the SQLite index file.

    Returns:
        SQLAlchemy engine for the index database.
    """
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={
            "timeout": 30,
            "check_same_thread": False,
        },
    )
    event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def delete_index(db_path: Path) -> bool:
    """Delete the index database file if it exists.

    Returns True if a file was deleted, False otherwise.
    """
    if db_path.exists():
        db_path.unlink()
        log.info("Deleted index database: %s", db_path)
        return True
    return False


@contextmanager
def get_index_session(db_path: Path) -> Generator[Session, None, None]:
    """Create a session for the index database.

    Auto-creates tables on first use. The session is committed when the
    block exits normally and rolled back on error.

    Args:
        db_path: Path to the SQLite index file.

    Yields:
        SQLAlchemy Session for the index database.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = get_index_engine(db_path)

    IndexBase.metadata.create_all(engine)

    # Enable WAL mode for better concurrent access
    with engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.commit()

    session_factory = sessionmaker(bind=engine)
    session = session_factory()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()


def require_index(db_path: Path) -> None:
    """Ensure the index database exists before searching it.

    Raises:
        IndexNotFoundError: If *db_path* does not exist.
    """
    if not db_path.exists():
        raise IndexNotFoundError(db_path)
