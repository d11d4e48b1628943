# swap_monitor/database/__init__.py

from .connection import DatabaseManager
from .repository import SwapLogRepository
from .tables import metadata, swap_logs, SWAP_LOG_COLUMNS
