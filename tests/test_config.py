# tests/test_config.py

import pytest

from swap_monitor.core.config import MonitorConfig, database_url
from swap_monitor.core.exceptions import ConfigurationError

from conftest import POOL_ADDRESS


def test_infura_key_builds_mainnet_url():
    config = MonitorConfig.from_env({
        "INFURA_KEY": "abc123",
        "POOL_ADDRESS": POOL_ADDRESS,
        "DB_PATH": "swaps.db",
    })

    assert config.rpc.endpoint_url == "wss://mainnet.infura.io/ws/v3/abc123"
    assert config.database.url == "sqlite:///swaps.db"
    assert config.pool_address == POOL_ADDRESS


def test_explicit_ws_url_wins_over_infura_key():
    config = MonitorConfig.from_env({
        "SWAP_MONITOR_WS_URL": "ws://localhost:8546",
        "INFURA_KEY": "abc123",
        "POOL_ADDRESS": POOL_ADDRESS,
        "DB_PATH": "postgresql://user:pw@db:5432/swaps",
    })

    assert config.rpc.endpoint_url == "ws://localhost:8546"
    assert config.database.url == "postgresql://user:pw@db:5432/swaps"


def test_overrides_win_over_environment():
    config = MonitorConfig.from_env(
        {"INFURA_KEY": "abc123", "POOL_ADDRESS": "0x" + "1" * 40, "DB_PATH": "env.db"},
        ws_url="ws://override:8546",
        pool_address=POOL_ADDRESS,
        db="cli.db",
    )

    assert config.rpc.endpoint_url == "ws://override:8546"
    assert config.pool_address == POOL_ADDRESS
    assert config.database.url == "sqlite:///cli.db"


@pytest.mark.parametrize("missing", ["INFURA_KEY", "POOL_ADDRESS", "DB_PATH"])
def test_missing_required_setting(missing):
    env = {"INFURA_KEY": "abc123", "POOL_ADDRESS": POOL_ADDRESS, "DB_PATH": "swaps.db"}
    del env[missing]

    with pytest.raises(ConfigurationError) as exc_info:
        MonitorConfig.from_env(env)

    assert exc_info.value.stage == "config"


def test_database_url_passthrough():
    assert database_url("sqlite:////var/lib/swaps.db") == "sqlite:////var/lib/swaps.db"
    assert database_url("/var/lib/swaps.db") == "sqlite:////var/lib/swaps.db"
