import logging

from sqlalchemy import Connection, create_engine, text
from sqlalchemy.engine import Engine

from billwise.schema import statements
from billwise.settings import settings

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_connection: Connection | None = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_engine(
            settings.db_url,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        logger.info("Database engine created")
    return _engine


def get_connection() -> Connection:
    """Return a global singleton connection for CLI and script use.

    The web app uses per-request connections via DBConnectionMiddleware instead.
    """
    global _connection
    if _connection is None:
        _connection = get_engine().connect()
        logger.debug("Singleton DB connection created")
    return _connection


def create_schema(conn: Connection) -> None:
    for stmt in statements():
        conn.execute(text(stmt))
    conn.commit()


def initialize_db() -> None:
    """Create any missing tables."""
    logger.info("Initializing database schema")
    with get_engine().connect() as conn:
        create_schema(conn)
    logger.info("Schema ready")
