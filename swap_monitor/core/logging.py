# swap_monitor/core/logging.py
"""
Centralized logging system for the swap monitor.

Provides:
- SwapMonitorLogger: Global logging configuration
- LoggingMixin: Consistent logging behavior for classes
- Utility functions: Context logging helpers
"""

import logging
import sys
from logging import DEBUG, INFO, ERROR
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime


ROOT_LOGGER_NAME = 'swap_monitor'


class SwapMonitorFormatter(logging.Formatter):
    def __init__(self, include_context: bool = False):
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        base_msg = f"{timestamp} - {record.name} - {record.levelname} - {record.getMessage()}"

        if record.exc_info:
            base_msg = f"{base_msg}\n{self.formatException(record.exc_info)}"

        if not self.include_context:
            return base_msg

        context_parts = []
        context_attrs = ['tx_hash', 'block_number', 'contract_address', 'log_index',
                        'stage', 'error', 'events_stored', 'endpoint']

        for attr in context_attrs:
            if hasattr(record, attr):
                context_parts.append(f"{attr}={getattr(record, attr)}")

        if context_parts:
            return f"{base_msg} | {' '.join(context_parts)}"

        return base_msg


class SwapMonitorLogger:
    """Global logging configuration and management"""

    _configured = False
    _log_level = logging.INFO

    @classmethod
    def configure(cls,
                  log_dir: Optional[Path] = None,
                  log_level: str = "INFO",
                  console_enabled: bool = True,
                  file_enabled: bool = False,
                  structured_format: bool = True) -> None:

        if cls._configured:
            return

        cls._log_level = getattr(logging, log_level.upper())

        if file_enabled and log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        root_logger.setLevel(cls._log_level)

        root_logger.handlers.clear()

        if console_enabled:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(cls._log_level)

            if structured_format:
                console_formatter = SwapMonitorFormatter(include_context=True)
            else:
                console_formatter = logging.Formatter(
                    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
                )
            console_handler.setFormatter(console_formatter)
            root_logger.addHandler(console_handler)

        if file_enabled and log_dir:
            # Main log file
            file_handler = logging.FileHandler(log_dir / 'swap_monitor.log')
            file_handler.setLevel(cls._log_level)
            file_formatter = SwapMonitorFormatter(include_context=True)
            file_handler.setFormatter(file_formatter)
            root_logger.addHandler(file_handler)

            # Error log file
            error_handler = logging.FileHandler(log_dir / 'swap_monitor_errors.log')
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(file_formatter)
            root_logger.addHandler(error_handler)

        cls._configured = True

    @classmethod
    def configure_from_env(cls, env: Dict[str, str], verbose: bool = False) -> None:
        log_dir_env = env.get("SWAP_MONITOR_LOG_DIR")
        log_dir = Path(log_dir_env) if log_dir_env else Path.cwd() / "logs"

        log_level = "DEBUG" if verbose else env.get("SWAP_MONITOR_LOG_LEVEL", "INFO")
        file_enabled = env.get("SWAP_MONITOR_LOG_FILE", "false").lower() == "true"
        structured_format = env.get("SWAP_MONITOR_LOG_STRUCTURED", "true").lower() == "true"

        cls.configure(
            log_dir=log_dir,
            log_level=log_level,
            console_enabled=True,
            file_enabled=file_enabled,
            structured_format=structured_format
        )

    @classmethod
    def reset(cls) -> None:
        """Drop handlers so the next configure() call takes effect"""
        logging.getLogger(ROOT_LOGGER_NAME).handlers.clear()
        cls._configured = False

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not cls._configured:
            cls.configure()

        if not name.startswith(ROOT_LOGGER_NAME):
            name = f'{ROOT_LOGGER_NAME}.{name}'

        return logging.getLogger(name)


# === Utility Functions ===

def get_class_logger(cls_instance) -> logging.Logger:
    module = cls_instance.__class__.__module__
    class_name = cls_instance.__class__.__name__

    # Clean up module name
    prefix = f'{ROOT_LOGGER_NAME}.'
    if module.startswith(prefix):
        module = module[len(prefix):]

    logger_name = f"{module}.{class_name}"
    return SwapMonitorLogger.get_logger(logger_name)


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    if logger.isEnabledFor(level):
        record = logger.makeRecord(
            logger.name, level, "", 0, message, (), None
        )
        for key, value in context.items():
            setattr(record, key, value)
        logger.handle(record)


# === LoggingMixin for Classes ===

class LoggingMixin:
    """
    Mixin to add consistent logging behavior to any class.

    Provides convenient logging methods that automatically:
    - Create class-specific loggers
    - Support structured context logging
    """

    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class"""
        if not hasattr(self, '_logger'):
            self._logger = get_class_logger(self)
        return self._logger

    def log_debug(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.DEBUG, message, **context)

    def log_info(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.INFO, message, **context)

    def log_warning(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.WARNING, message, **context)

    def log_error(self, message: str, **context) -> None:
        log_with_context(self.logger, logging.ERROR, message, **context)

    def log_transaction_context(self, tx_hash: str, **additional_context) -> Dict[str, Any]:
        context = {'tx_hash': tx_hash}
        context.update(additional_context)
        return context
