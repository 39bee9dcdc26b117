"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from src.inventory.core.errors import InventoryError, StorageError
from src.inventory.core.services.database.db_utils import (
    enable_sqlite_write_locks,
    redact_database_url,
)
from src.inventory.runtime.config.config_data import ConfigData, DatabaseConfig
from src.inventory.runtime.context import get_config


class DbSessionService:
    def __init__(self, engine: Engine | None = None, config: ConfigData | None = None):
        """Initialize the shared database engine and session factory.

        An explicit ``engine`` takes precedence over the configured URL, which
        lets tests hand in their own SQLite engine.

        SQLite engines get write-locking transactions, since SQLite cannot
        honour ``FOR UPDATE``.
        """
        main_config = config or get_config()

        if engine is None:
            engine = self._create_engine(main_config)
        self._engine = engine

        if engine.dialect.name == "sqlite":
            enable_sqlite_write_locks(engine)

    def _create_engine(self, main_config: ConfigData) -> Engine:
        db_config = main_config.database
        logger.info("Configuring database engine for environment: {}", main_config.app.environment)
        engine_kwargs: dict[str, Any] = {
            "pool_pre_ping": True,
            "echo": db_config.echo,
            "connect_args": self._get_connect_args(main_config),
        }
        if not db_config.is_sqlite:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        logger.info(
            "Initializing database engine for {}", redact_database_url(db_config.url)
        )
        engine = create_engine(db_config.url, **engine_kwargs)

        if main_config.app.environment == "production":
            logger.bind(
                pool_size=db_config.pool_size,
                max_overflow=db_config.max_overflow,
                pool_timeout=db_config.pool_timeout,
                pool_recycle=db_config.pool_recycle,
            ).info("Database engine initialized")

        return engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def _get_connect_args(self, config: ConfigData) -> dict:
        """Get database-specific connection arguments."""
        connect_args: dict[str, Any] = {}
        db_config: DatabaseConfig = config.database

        if db_config.url.startswith("postgresql"):
            connect_args.update(
                {
                    "application_name": f"{config.app.environment}_inventory_api",
                    "connect_timeout": 30,
                }
            )

        elif db_config.is_sqlite:
            connect_args.update(
                {
                    "check_same_thread": False,
                    "timeout": 20,  # Lock timeout
                }
            )

            if config.app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "It ignores row-level locks; use PostgreSQL."
                )

        return connect_args

    def create_all(self) -> None:
        """Create all database tables."""
        from src.inventory.entities.product import ProductTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,
            autoflush=True,
        )

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Run the enclosed block in one transaction on a dedicated session.

        Commits when the block exits normally. Any exception rolls the
        transaction back first; store failures are then raised as
        ``StorageError`` while domain errors propagate unchanged. The session
        is closed, returning its connection to the pool, on every path.
        """
        session = self.get_session()
        try:
            session.begin()
            yield session
            session.commit()
        except InventoryError:
            self._rollback(session)
            raise
        except SQLAlchemyError as e:
            self._rollback(session)
            logger.bind(error_type=type(e).__name__).error(
                "Database transaction failed: {}", e
            )
            raise StorageError() from e
        except BaseException:
            self._rollback(session)
            raise
        finally:
            session.close()

    @contextmanager
    def read_session(self) -> Iterator[Session]:
        """Session for read-only work; store failures surface as ``StorageError``."""
        session = self.get_session()
        try:
            yield session
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error("Database read failed: {}", e)
            raise StorageError() from e
        finally:
            session.close()

    @staticmethod
    def _rollback(session: Session) -> None:
        try:
            session.rollback()
        except SQLAlchemyError:
            # The original failure is what the caller needs to see.
            logger.exception("Rollback failed")

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }

    def dispose(self) -> None:
        """Close all pooled connections."""
        self._engine.dispose()
        logger.info("Database engine disposed")
