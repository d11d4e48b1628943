# tests/conftest.py
"""
pytest fixtures for the swap monitor: a real mainnet swap log, a temporary
SQLite store and an in-process stand-in for the node's WebSocket API.
"""

import pytest

from swap_monitor.core.logging import SwapMonitorLogger
from swap_monitor.database import DatabaseManager, SwapLogRepository
from swap_monitor.stream import NodeConnector
from swap_monitor.types import DatabaseConfig


SWAP_TX_HASH = "0xe92955b4c46b38de18c1cdd58b06d49d45d6f9ca0906a86918f4cf20650683b4"
SWAP_SENDER = "0xe592427a0aece92de3edee1f18e0157c05861564"
SWAP_RECEIVER = "0x4b7d6c3cea01f4d54a9cad6587da106ea39da1e6"
SWAP_TOPIC0 = "0xc42079f94a6350d7e6235f29174924f928cc2ac818eb64fed8004e115fbcca67"
SWAP_TOPIC1 = "0x000000000000000000000000e592427a0aece92de3edee1f18e0157c05861564"
SWAP_TOPIC2 = "0x0000000000000000000000004b7d6c3cea01f4d54a9cad6587da106ea39da1e6"
SWAP_DATA = (
    "0xfffffffffffffffffffffffffffffffffffffffffffffffffffffffff0511b80"
    "0000000000000000000000000000000000000000000000000240e540e2dc0042"
    "000000000000000000000000000000000000610413a1a7c814aa98ca36d09f8b"
    "000000000000000000000000000000000000000000000001c4846addbd259faf"
    "00000000000000000000000000000000000000000000000000000000000316ab"
)
SWAP_AMOUNT0 = -263120000
SWAP_AMOUNT1 = 162381653432074306
SWAP_SQRT_PRICE = 1967716719848838692609454179917707
SWAP_LIQUIDITY = 32607304702662909871
SWAP_TICK = 202411

POOL_ADDRESS = "0x88e6A0c2dDD26FEEb64F039a2c41296FcB3f5640"


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Let pytest capture package logs instead of a console handler"""
    SwapMonitorLogger.reset()
    SwapMonitorLogger.configure(log_level="DEBUG", console_enabled=False)
    yield
    SwapMonitorLogger.reset()


def make_swap_log(**overrides):
    log = {
        "address": POOL_ADDRESS,
        "blockNumber": "0x10d4f2a",
        "logIndex": "0x5",
        "transactionHash": SWAP_TX_HASH,
        "topics": [SWAP_TOPIC0, SWAP_TOPIC1, SWAP_TOPIC2],
        "data": SWAP_DATA,
        "removed": False,
    }
    log.update(overrides)
    return log


@pytest.fixture
def swap_log():
    return make_swap_log()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "swaps.db"


@pytest.fixture
def db_manager(db_path):
    manager = DatabaseManager(DatabaseConfig(url=f"sqlite:///{db_path}"))
    manager.initialize()
    yield manager
    manager.shutdown()


@pytest.fixture
def repository(db_manager):
    repo = SwapLogRepository(db_manager)
    repo.initialize()
    return repo


class FakeProvider:
    def __init__(self, connect_error=None):
        self.connect_error = connect_error
        self.connected = False
        self.disconnect_calls = 0

    async def connect(self):
        if self.connect_error is not None:
            raise self.connect_error
        self.connected = True

    async def disconnect(self):
        self.connected = False
        self.disconnect_calls += 1


class FakeEth:
    def __init__(self, subscription_id="0x9cef478923ff08bf67fde6c64013158d"):
        self.subscription_id = subscription_id
        self.subscriptions = []

    async def subscribe(self, kind, params):
        self.subscriptions.append((kind, params))
        return self.subscription_id


class FakeSocket:
    def __init__(self, eth, logs, stream_error=None):
        self.eth = eth
        self.logs = list(logs)
        self.stream_error = stream_error

    async def process_subscriptions(self):
        for log in self.logs:
            yield {"subscription": self.eth.subscription_id, "result": log}
        if self.stream_error is not None:
            raise self.stream_error


class FakeWeb3:
    """Duck-typed AsyncWeb3 exposing the calls NodeConnector makes."""

    def __init__(self, logs=(), connect_error=None, stream_error=None):
        self.provider = FakeProvider(connect_error)
        self.eth = FakeEth()
        self.socket = FakeSocket(self.eth, logs, stream_error)
        self.endpoint_url = None


@pytest.fixture
def fake_node():
    """Factory for a connector backed by a FakeWeb3 replaying the given logs."""
    def build(logs=(), connect_error=None, stream_error=None):
        w3 = FakeWeb3(logs, connect_error, stream_error)

        def factory(endpoint_url, timeout):
            w3.endpoint_url = endpoint_url
            return w3

        connector = NodeConnector("wss://node.example/ws/v3/secret", web3_factory=factory)
        return connector, w3

    return build
