# swap_monitor/database/repository.py

from typing import Any, Dict, List, Optional

from sqlalchemy import func, insert, select, text
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import PersistenceError
from ..core.logging import SwapMonitorLogger, log_with_context, DEBUG, INFO, ERROR
from ..types import IngestedRecord
from .connection import DatabaseManager
from .tables import metadata, swap_logs


class SwapLogRepository:
    """Append-only access to the logs table."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self.table = swap_logs
        self.logger = SwapMonitorLogger.get_logger(f'database.repository.{swap_logs.name}')

    def initialize(self) -> None:
        """Create the logs table if it does not exist yet. Safe to call repeatedly."""
        try:
            metadata.create_all(self.db_manager.engine, tables=[self.table], checkfirst=True)
        except SQLAlchemyError as e:
            log_with_context(self.logger, ERROR, "Failed to create logs table", error=str(e))
            raise PersistenceError(f"Could not create table {self.table.name}: {e}") from e

        log_with_context(self.logger, INFO, "Logs table ready", table=self.table.name)

    def append(self, record: IngestedRecord) -> None:
        row = record.to_row()
        try:
            with self.db_manager.get_transaction() as session:
                session.execute(insert(self.table).values(**row))
        except SQLAlchemyError as e:
            log_with_context(self.logger, ERROR, "Failed to append swap log",
                            tx_hash=record.tx_hash, error=str(e))
            raise PersistenceError(f"Could not store swap log: {e}", tx_hash=record.tx_hash) from e

        log_with_context(self.logger, DEBUG, "Stored swap log", tx_hash=record.tx_hash)

    def fetch_all(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Stored rows, for inspection and tests.

        On SQLite rows come back in insertion order (rowid). The table has no
        ordering column, so other backends return them in scan order.
        """
        query = select(self.table)
        if self.db_manager.engine.dialect.name == "sqlite":
            query = query.order_by(text("rowid"))
        if limit is not None:
            query = query.limit(limit)

        try:
            with self.db_manager.get_session() as session:
                return [dict(row._mapping) for row in session.execute(query)]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read {self.table.name}: {e}") from e

    def count(self) -> int:
        try:
            with self.db_manager.get_session() as session:
                return session.execute(select(func.count()).select_from(self.table)).scalar_one()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not count {self.table.name}: {e}") from e
