# swap_monitor/__init__.py

from .core.config import MonitorConfig
from .core.exceptions import (
    SwapMonitorError,
    ConfigurationError,
    StreamConnectionError,
    InvalidAddressError,
    MalformedEventError,
    DecodeError,
    PersistenceError,
)
from .core.logging import SwapMonitorLogger
from .database import DatabaseManager, SwapLogRepository
from .decode import SwapDecoder, decode_swap_payload, encode_swap_payload
from .pipeline import IngestionLoop, LoopState, run_monitor
from .stream import NodeConnector, LogFilter, build_swap_filter
from .types import SwapPayload, IngestedRecord, SubscribedLog, ProcessingError

__version__ = "0.1.0"
