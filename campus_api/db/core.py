# campus_api/db/core.py
"""
Process-wide database engine.

init_engine() is called once from the application lifespan and
dispose_engine() on shutdown; requests borrow connections through
get_connection(), which always returns them to the pool.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import DBAPIError, TimeoutError as PoolTimeoutError

from campus_api.common.errors import UnavailableError
from campus_api.config import Settings, get_settings

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cur = dbapi_connection.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON")
    finally:
        cur.close()


def _is_memory_sqlite(url) -> bool:
    database = url.database or ""
    return database in ("", ":memory:") or url.query.get("mode") == "memory"


def build_engine(
    database_url: str,
    *,
    pool_size: Optional[int] = None,
    max_overflow: Optional[int] = None,
    pool_timeout: Optional[float] = None,
    pool_recycle: Optional[int] = None,
    poolclass: Any = None,
) -> Engine:
    """
    Create an engine for database_url.

    SQLite gets check_same_thread=False and foreign keys switched on for
    every new connection. Pool bounds apply to every queue-pooled database,
    file-backed SQLite included; in-memory SQLite and an explicit poolclass
    keep their own pool.
    """
    kwargs: Dict[str, Any] = {}
    connect_args: Dict[str, Any] = {}
    url = make_url(database_url)
    is_sqlite = url.get_backend_name() == "sqlite"

    if is_sqlite:
        connect_args["check_same_thread"] = False

    if poolclass is not None:
        kwargs["poolclass"] = poolclass
    elif not (is_sqlite and _is_memory_sqlite(url)):
        kwargs.update(
            pool_size=pool_size if pool_size is not None else 5,
            max_overflow=max_overflow if max_overflow is not None else 0,
            pool_timeout=pool_timeout if pool_timeout is not None else 30,
            pool_recycle=pool_recycle if pool_recycle is not None else -1,
            pool_pre_ping=True,
        )

    engine = create_engine(database_url, connect_args=connect_args, **kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def init_engine(settings: Optional[Settings] = None) -> Engine:
    global _engine
    if _engine is not None:
        return _engine

    settings = settings or get_settings()
    _engine = build_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
        pool_recycle=settings.db_pool_recycle,
    )
    logger.info(
        "[BOOT] database engine ready dialect=%s pool_size=%s timeout=%ss",
        _engine.dialect.name,
        settings.db_pool_size,
        settings.db_pool_timeout,
    )
    return _engine


def dispose_engine() -> None:
    """Close every pooled connection. Checked-out connections are closed on return."""
    global _engine
    if _engine is None:
        return
    _engine.dispose()
    _engine = None
    logger.info("[SHUTDOWN] database engine disposed")


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("database engine is not initialized; call init_engine() first")
    return _engine


# ============================================================
# FastAPI dependency: one connection per request
# ============================================================
def get_connection() -> Iterator[Connection]:
    engine = get_engine()
    try:
        conn = engine.connect()
    except (PoolTimeoutError, DBAPIError) as e:
        raise UnavailableError(f"could not acquire database connection: {e}") from e

    try:
        yield conn
    finally:
        conn.close()
