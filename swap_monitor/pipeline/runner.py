# swap_monitor/pipeline/runner.py

from typing import Optional

from ..core.config import MonitorConfig
from ..core.logging import SwapMonitorLogger, log_with_context, INFO
from ..database.connection import DatabaseManager
from ..database.repository import SwapLogRepository
from ..stream.connector import NodeConnector
from ..stream.filters import build_swap_filter
from .ingestion import IngestionLoop, RecordCallback


async def run_monitor(config: MonitorConfig,
                      on_record: Optional[RecordCallback] = None,
                      connector: Optional[NodeConnector] = None) -> int:
    """
    Store setup, filter, connection, then the ingestion loop.

    Returns the number of swaps stored once the subscription ends. Any
    failure propagates after the connection and the engine are released.
    """
    logger = SwapMonitorLogger.get_logger('pipeline.runner')

    db_manager = DatabaseManager(config.database)
    db_manager.initialize()

    try:
        repository = SwapLogRepository(db_manager)
        repository.initialize()

        log_filter = build_swap_filter(config.pool_address)
        connector = connector or NodeConnector(config.rpc.endpoint_url, timeout=config.rpc.timeout)

        loop = IngestionLoop(connector, log_filter, repository, on_record=on_record)
        try:
            stored = await loop.run()
        finally:
            await connector.disconnect()

        log_with_context(logger, INFO, "Swap monitor finished",
                         contract_address=log_filter.address, events_stored=stored)
        return stored
    finally:
        db_manager.shutdown()
