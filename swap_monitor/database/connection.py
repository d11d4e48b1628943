# swap_monitor/database/connection.py

from typing import Any, Dict, Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, Engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool

from ..core.exceptions import PersistenceError
from ..core.logging import SwapMonitorLogger, log_with_context, INFO, DEBUG, ERROR
from ..types import DatabaseConfig


class DatabaseManager:
    def __init__(self, config: DatabaseConfig):
        if not config:
            raise ValueError("DatabaseConfig is required")

        self.config = config
        self.logger = SwapMonitorLogger.get_logger(f'database.{self.__class__.__name__.lower()}')
        self._engine = None
        self._session_factory = None

        log_with_context(self.logger, INFO, "DatabaseManager initialized",
                        db_url_host=self._extract_host_from_url(config.url))

    def _extract_host_from_url(self, url: str) -> str:
        if url.startswith("sqlite"):
            return "sqlite"
        try:
            if '@' in url and '/' in url:
                after_at = url.split('@')[1]
                host_part = after_at.split('/')[0]
                return host_part
            return "unknown"
        except Exception:
            return "unknown"

    def _engine_options(self) -> Dict[str, Any]:
        if self.config.url.startswith("sqlite"):
            return {"echo": False}

        return {
            "poolclass": QueuePool,
            "pool_size": self.config.pool_size,
            "max_overflow": self.config.max_overflow,
            "pool_timeout": 30,
            "pool_recycle": 3600,  # Recycle connections after 1 hour
            "echo": False,
        }

    def initialize(self) -> None:
        if self._engine is not None:
            self.logger.warning("Database already initialized")
            return

        try:
            self.logger.info("Initializing database engine")

            engine = create_engine(self.config.url, **self._engine_options())

            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))

        except SQLAlchemyError as e:
            log_with_context(self.logger, ERROR, "Failed to initialize database",
                            error=str(e),
                            exception_type=type(e).__name__)
            raise PersistenceError(f"Could not open database: {e}") from e

        self._engine = engine
        self._session_factory = sessionmaker(
            bind=self._engine,
            expire_on_commit=False,
        )

        log_with_context(self.logger, INFO, "Database initialized successfully",
                        db_url_host=self._extract_host_from_url(self.config.url))

    def shutdown(self) -> None:
        self.logger.info("Shutting down database connections")

        if self._engine:
            self._engine.dispose()
            self._engine = None

        self._session_factory = None
        self.logger.info("Database shutdown completed")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise PersistenceError("Database not initialized. Call initialize() first.")
        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            raise PersistenceError("Database not initialized. Call initialize() first.")
        return self._session_factory

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        session = self.session_factory()
        try:
            log_with_context(self.logger, DEBUG, "Database session created")
            yield session
        except Exception as e:
            log_with_context(self.logger, ERROR, "Database session error, rolling back",
                            error=str(e),
                            exception_type=type(e).__name__)
            session.rollback()
            raise
        finally:
            session.close()
            log_with_context(self.logger, DEBUG, "Database session closed")

    @contextmanager
    def get_transaction(self) -> Generator[Session, None, None]:
        with self.get_session() as session:
            yield session
            session.commit()
            log_with_context(self.logger, DEBUG, "Database transaction committed")
