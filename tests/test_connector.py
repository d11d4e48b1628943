# tests/test_connector.py

import asyncio
import socket
import time

import pytest

from swap_monitor.core.exceptions import StreamConnectionError
from swap_monitor.stream import NodeConnector, build_swap_filter

from conftest import POOL_ADDRESS, make_swap_log


def test_connect_returns_shared_handle(fake_node):
    connector, w3 = fake_node()

    async def scenario():
        handle = await connector.connect()
        again = await connector.connect()
        return handle, again

    handle, again = asyncio.run(scenario())

    assert handle is w3 and again is w3
    assert connector.connected
    assert w3.provider.connected
    assert w3.endpoint_url == "wss://node.example/ws/v3/secret"


def test_handshake_failure_raises_connection_error(fake_node):
    connector, _ = fake_node(connect_error=OSError("connection refused"))

    with pytest.raises(StreamConnectionError) as exc_info:
        asyncio.run(connector.connect())

    assert isinstance(exc_info.value, ConnectionError)
    assert exc_info.value.stage == "connect"
    # API keys in the URL path stay out of messages
    assert "secret" not in str(exc_info.value)
    assert not connector.connected


def test_subscribe_requires_connection(fake_node):
    connector, _ = fake_node()

    async def scenario():
        async for _ in connector.subscribe_logs(build_swap_filter(POOL_ADDRESS)):
            pass

    with pytest.raises(RuntimeError):
        asyncio.run(scenario())


def test_subscribe_yields_results_in_order(fake_node):
    logs = [make_swap_log(logIndex="0x1"), make_swap_log(logIndex="0x2")]
    connector, w3 = fake_node(logs)

    async def scenario():
        async with connector:
            return [log async for log in connector.subscribe_logs(build_swap_filter(POOL_ADDRESS))]

    received = asyncio.run(scenario())

    assert [log["logIndex"] for log in received] == ["0x1", "0x2"]
    assert not w3.provider.connected


def test_results_for_other_subscriptions_are_ignored(fake_node):
    connector, w3 = fake_node([make_swap_log()])

    async def foreign():
        yield {"subscription": "0xother", "result": make_swap_log(logIndex="0x9")}
        yield {"subscription": w3.eth.subscription_id, "result": make_swap_log(logIndex="0x1")}

    w3.socket.process_subscriptions = foreign

    async def scenario():
        async with connector:
            return [log async for log in connector.subscribe_logs(build_swap_filter(POOL_ADDRESS))]

    assert [log["logIndex"] for log in asyncio.run(scenario())] == ["0x1"]


def test_disconnect_without_connect_is_noop(fake_node):
    connector, w3 = fake_node()

    asyncio.run(connector.disconnect())

    assert w3.provider.disconnect_calls == 0


def _closed_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_real_provider_makes_a_single_handshake_attempt():
    connector = NodeConnector(f"ws://127.0.0.1:{_closed_port()}/ws", timeout=5)

    started = time.monotonic()
    with pytest.raises(StreamConnectionError) as exc_info:
        asyncio.run(connector.connect())
    elapsed = time.monotonic() - started

    # web3's first retry would sleep 1.75s before the second attempt
    assert elapsed < 1.5
    assert exc_info.value.stage == "connect"
    assert not connector.connected
