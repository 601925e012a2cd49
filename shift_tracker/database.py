import logging
import time

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .config import (
    DATABASE_URL,
    DB_BUSY_TIMEOUT_MS,
    DB_LOG_SLOW_QUERIES,
    DB_SLOW_QUERY_THRESHOLD,
)

logger = logging.getLogger(__name__)

Base = declarative_base()


def _configure_sqlite(dbapi_conn, _connection_record):
    """Per-connection pragmas: FK enforcement, WAL and a busy timeout for concurrent writers"""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.execute("PRAGMA journal_mode = WAL")
    cursor.execute("PRAGMA synchronous = NORMAL")
    cursor.execute(f"PRAGMA busy_timeout = {DB_BUSY_TIMEOUT_MS}")
    cursor.close()


def _install_slow_query_logging(engine: Engine, threshold: float) -> None:
    """Warn about statements slower than threshold seconds"""

    @event.listens_for(engine, "before_cursor_execute")
    def mark_query_start(conn, _cursor, _statement, _parameters, _context, _executemany):
        conn.info.setdefault("query_started", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def report_slow_query(conn, _cursor, statement, _parameters, _context, _executemany):
        elapsed = time.perf_counter() - conn.info["query_started"].pop()
        if elapsed > threshold:
            logger.warning(f"🐌 Slow query ({elapsed:.2f}s > {threshold}s): {statement[:200]}...")


def create_db_engine(
    url: str = DATABASE_URL,
    log_slow_queries: bool = DB_LOG_SLOW_QUERIES,
    slow_query_threshold: float = DB_SLOW_QUERY_THRESHOLD,
    **kwargs,
) -> Engine:
    """Build an engine for the given URL, applying SQLite pragmas when relevant"""
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    else:
        kwargs.setdefault("pool_pre_ping", True)

    engine = create_engine(url, echo=False, **kwargs)

    if is_sqlite:
        event.listen(engine, "connect", _configure_sqlite)
    if log_slow_queries:
        _install_slow_query_logging(engine, slow_query_threshold)
    return engine


try:
    engine = create_db_engine()
    logger.info("✅ Database engine created successfully")
except Exception as e:
    logger.error(f"❌ Failed to create database engine: {e}")
    raise

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
