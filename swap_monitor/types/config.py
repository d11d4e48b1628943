# swap_monitor/types/config.py

from msgspec import Struct


class DatabaseConfig(Struct):
    url: str
    pool_size: int = 5
    max_overflow: int = 10


class RpcConfig(Struct):
    endpoint_url: str
    timeout: int = 30
