"""
Database engine/session management for the product backend.

Every store operation checks a connection out of the engine's pool for the
duration of one session and returns it when the session closes. Engines for
PostgreSQL get the pool sizing from `Settings`; SQLite engines (tests, local
runs) get foreign-key enforcement switched on per connection so the
`ON DELETE` rules of the schema hold there too.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from loguru import logger
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from product_app.config import Settings, get_settings
from product_app.db import models  # noqa: F401  (registers the mappings on Base.metadata)
from product_app.db.base import Base


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# PUBLIC_INTERFACE
def build_engine(database_url: str, **engine_kwargs: Any) -> Engine:
    """Create an engine for `database_url`; extra kwargs are passed to `create_engine`."""
    engine = create_engine(database_url, pool_pre_ping=True, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


# PUBLIC_INTERFACE
def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory shared by the repositories."""
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def _engine_kwargs(settings: Settings) -> dict:
    if settings.connection_string.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
    }


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    logger.info("Configuring database engine for environment: {}", settings.environment)
    return build_engine(settings.connection_string, **_engine_kwargs(settings))


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return build_session_factory(get_engine())


# PUBLIC_INTERFACE
def create_schema(engine: Engine) -> None:
    """Create any missing tables (categories, products, product_images)."""
    logger.info("Creating missing tables on {}", engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(engine)


# PUBLIC_INTERFACE
def db_healthcheck(engine: Optional[Engine] = None) -> bool:
    """
    Perform a simple DB liveness check.

    Returns:
        bool: True if DB is reachable and responds to `SELECT 1`, else False.
    """
    engine = engine or get_engine()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as exc:
        logger.warning("Database health check failed: {}", exc)
        return False
