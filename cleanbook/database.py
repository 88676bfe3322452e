import logging
import os
import time
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import DATABASE_URL

logger = logging.getLogger(__name__)

# Pool settings for server databases (ignored for SQLite)
POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "20"))
POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))
POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "300"))
ENABLE_QUERY_LOGGING = os.getenv("DB_LOG_SLOW_QUERIES", "true").lower() == "true"
SLOW_QUERY_THRESHOLD = float(os.getenv("DB_SLOW_QUERY_THRESHOLD", "1.0"))


def engine_options(url: str) -> dict:
    """create_engine keyword arguments for the given database URL"""
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        options = {"connect_args": {"check_same_thread": False}}
        if not parsed.database or parsed.database == ":memory:":
            # One shared connection, otherwise every session sees an empty database
            options["poolclass"] = StaticPool
        return options

    return {
        "pool_pre_ping": True,
        "pool_recycle": POOL_RECYCLE,
        "pool_size": POOL_SIZE,
        "max_overflow": MAX_OVERFLOW,
        "pool_timeout": POOL_TIMEOUT,
    }


try:
    engine = create_engine(DATABASE_URL, echo=False, **engine_options(DATABASE_URL))
    logger.info(f"✅ Database engine created ({engine.dialect.name})")
except Exception as e:
    logger.error(f"❌ Failed to create database engine: {e}")
    raise

if ENABLE_QUERY_LOGGING:

    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, _cursor, statement, _parameters, context, _executemany):
        elapsed = time.perf_counter() - conn.info["query_start_time"].pop(-1)
        if elapsed > SLOW_QUERY_THRESHOLD:
            logger.warning(f"🐌 Slow query ({elapsed:.2f}s): {statement[:200]}...")


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Request-scoped session dependency"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for work outside a request (startup seeding, scripts)"""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
