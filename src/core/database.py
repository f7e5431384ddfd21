"""
Database configuration and session management.

This module sets up the SQLAlchemy engine, the declarative Base, and the
Database handle that services use to open read sessions and atomic write
transactions. The handle is constructed explicitly from Settings and passed
to whoever needs it; there is no module-level engine.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Generator, Optional

from sqlalchemy import DateTime, create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.types import TypeDecorator

from core.config import Settings
from core.exceptions import BookingSystemError, classify_store_error
from utils.datetime_utils import to_utc, utc_now

logger = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware timestamp stored as UTC.

    Values are converted to UTC on write and come back as UTC-aware datetimes on
    read, including on SQLite which does not keep offsets.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return None
        value = to_utc(value)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


# Mapper event listeners keep created_at / updated_at current on ORM writes
@event.listens_for(Base, "before_insert", propagate=True)
def receive_before_insert(mapper, connection, target):  # type: ignore
    """Set created_at and updated_at on insert."""
    now = utc_now()
    for column_name in ("created_at", "updated_at"):
        if column_name in mapper.columns and getattr(target, column_name, None) is None:
            setattr(target, column_name, now)


@event.listens_for(Base, "before_update", propagate=True)
def receive_before_update(mapper, connection, target):  # type: ignore
    """Set updated_at on update."""
    if "updated_at" in mapper.columns:
        setattr(target, "updated_at", utc_now())


def _install_sqlite_listeners(engine: Engine) -> None:
    """
    Make SQLite behave like a transactional store with enforced constraints.

    pysqlite's own transaction handling is disabled so that every SQLAlchemy
    transaction starts with BEGIN IMMEDIATE. That takes the database write lock
    up front, which serializes concurrent booking transactions the same way a
    row lock does on PostgreSQL.
    """

    @event.listens_for(engine, "connect")
    def on_connect(dbapi_connection, connection_record):  # type: ignore
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def on_begin(conn):  # type: ignore
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(settings: Settings) -> Engine:
    """
    Create a SQLAlchemy engine with bounded connection and statement timeouts.

    Args:
        settings: Application settings

    Returns:
        Configured Engine
    """
    engine_kwargs: Dict[str, Any] = {
        "pool_pre_ping": True,  # Verify connections before use
        "pool_recycle": settings.db_pool_recycle_seconds,
        "echo": settings.db_echo,
        "future": True,
    }
    connect_args: Dict[str, Any] = {}

    if settings.is_sqlite:
        # Busy timeout: how long a transaction waits for the write lock
        connect_args["timeout"] = max(settings.db_lock_timeout_ms / 1000.0, 1.0)
        connect_args["check_same_thread"] = False
    else:
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["pool_timeout"] = settings.db_pool_timeout_seconds
        if settings.database_url.startswith("postgresql"):
            connect_args["connect_timeout"] = settings.db_connect_timeout_seconds
            connect_args["options"] = (
                f"-c statement_timeout={settings.db_statement_timeout_ms} "
                f"-c lock_timeout={settings.db_lock_timeout_ms}"
            )

    engine = create_engine(settings.database_url, connect_args=connect_args, **engine_kwargs)

    if settings.is_sqlite:
        _install_sqlite_listeners(engine)

    return engine


class Database:
    """
    Handle to the entity store.

    Provides read sessions and atomic write transactions. Store failures are
    rolled back and re-raised as classified BookingSystemError subclasses.
    """

    def __init__(self, settings: Settings, engine: Optional[Engine] = None, logger: Optional[logging.Logger] = None):
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.engine = engine or create_db_engine(settings)
        self.session_factory = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,  # Don't expire objects after commit
        )

    @contextmanager
    def _scope(self, commit: bool) -> Generator[Session, None, None]:
        db = self.session_factory()
        try:
            yield db
            if commit:
                db.commit()
            # Read scopes only close(); loaded objects stay usable when detached
        except BookingSystemError:
            # Expected business outcomes, not logged as errors
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            self.logger.exception(f"Database transaction failed: {e}")
            raise classify_store_error(e) from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @contextmanager
    def transaction(self) -> Generator[Session, None, None]:
        """
        Open an all-or-nothing write unit.

        Commits when the block exits normally and rolls back on any error, so no
        partial write is ever visible to other transactions.

        Example:
            ```python
            with database.transaction() as db:
                db.add(booking)
            ```
        """
        with self._scope(commit=True) as db:
            yield db

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Open a read-only session. Nothing done inside it is committed."""
        with self._scope(commit=False) as db:
            yield db

    def create_tables(self) -> None:
        """
        Create all tables defined on Base.

        Note:
            In production, prefer Alembic migrations. This is mainly for tests
            and local setup.
        """
        # Import models so they register with Base.metadata
        import models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
            self.logger.info("Database tables created successfully")
        except SQLAlchemyError as e:
            self.logger.exception(f"Failed to create database tables: {e}")
            raise

    def drop_tables(self) -> None:
        """
        Drop all tables defined on Base.

        WARNING: This permanently deletes all data.
        """
        import models  # noqa: F401

        try:
            Base.metadata.drop_all(bind=self.engine)
            self.logger.info("Database tables dropped successfully")
        except SQLAlchemyError as e:
            self.logger.exception(f"Failed to drop database tables: {e}")
            raise

    def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            self.logger.warning(f"Database ping failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()
