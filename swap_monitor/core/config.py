# swap_monitor/core/config.py

from msgspec import Struct
from typing import Dict, Mapping, Optional
import os
import logging

from dotenv import find_dotenv, load_dotenv

from ..types import DatabaseConfig, RpcConfig
from .exceptions import ConfigurationError
from .logging import SwapMonitorLogger, log_with_context


INFURA_WS_TEMPLATE = "wss://mainnet.infura.io/ws/v3/{}"


class MonitorConfig(Struct):
    rpc: RpcConfig
    database: DatabaseConfig
    pool_address: str

    @classmethod
    def from_env(cls, env: Optional[Dict[str, str]] = None, **overrides) -> 'MonitorConfig':
        """
        Build configuration from environment variables (and a .env file).

        Explicit keyword overrides (ws_url, pool_address, db) win over the
        environment, which is how the CLI options are applied.
        """
        logger = SwapMonitorLogger.get_logger('core.config')

        if env is None:
            env = load_environment()

        rpc = cls._create_rpc_config(env, overrides.get('ws_url'))
        database = cls._create_database_config(env, overrides.get('db'))

        pool_address = overrides.get('pool_address') or env.get("POOL_ADDRESS")
        if not pool_address:
            raise ConfigurationError("POOL_ADDRESS environment variable required")

        log_with_context(logger, logging.DEBUG, "Configuration loaded",
                         contract_address=pool_address)

        return cls(rpc=rpc, database=database, pool_address=pool_address)

    @staticmethod
    def _create_rpc_config(env: Dict[str, str], ws_url: Optional[str] = None) -> RpcConfig:
        endpoint_url = ws_url or env.get("SWAP_MONITOR_WS_URL")

        if not endpoint_url:
            infura_key = env.get("INFURA_KEY")
            if not infura_key:
                raise ConfigurationError(
                    "SWAP_MONITOR_WS_URL or INFURA_KEY environment variable required"
                )
            endpoint_url = INFURA_WS_TEMPLATE.format(infura_key)

        timeout = int(env.get("SWAP_MONITOR_WS_TIMEOUT", "30"))
        return RpcConfig(endpoint_url=endpoint_url, timeout=timeout)

    @staticmethod
    def _create_database_config(env: Dict[str, str], db: Optional[str] = None) -> DatabaseConfig:
        location = db or env.get("DB_PATH")
        if not location:
            raise ConfigurationError("DB_PATH environment variable required")

        return DatabaseConfig(url=database_url(location))


def load_environment() -> Mapping[str, str]:
    """Process environment after applying the nearest .env from the working directory"""
    load_dotenv(find_dotenv(usecwd=True))
    return os.environ


def database_url(location: str) -> str:
    """Accept either a SQLAlchemy URL or a plain SQLite file path"""
    if "://" in location:
        return location
    return f"sqlite:///{location}"
