# swap_monitor/core/exceptions.py
"""
Error taxonomy for the swap monitor.

Every pipeline stage raises one of these; nothing is retried locally.
The ingestion loop records the failure as a ProcessingError and stops.
"""

from typing import Any, Dict, Optional

from ..types.errors import ProcessingError


class SwapMonitorError(Exception):
    stage = "unknown"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = {k: v for k, v in context.items() if v is not None}

    def with_stage(self, stage: str) -> 'SwapMonitorError':
        self.stage = stage
        return self

    def to_processing_error(self, stage: Optional[str] = None) -> ProcessingError:
        return ProcessingError(
            stage=stage or self.stage,
            error_type=type(self).__name__,
            message=self.message,
            context=dict(self.context) if self.context else None,
        )


class ConfigurationError(SwapMonitorError):
    stage = "config"


class StreamConnectionError(SwapMonitorError, ConnectionError):
    """Handshake failure or a dropped subscription stream."""
    stage = "connect"


class InvalidAddressError(SwapMonitorError, ValueError):
    stage = "filter"


class MalformedEventError(SwapMonitorError):
    """Event does not carry the topics a swap event must have."""
    stage = "extract"


class DecodeError(SwapMonitorError, ValueError):
    stage = "decode"


class PersistenceError(SwapMonitorError):
    stage = "store"
