# tests/test_filters.py

import pytest

from swap_monitor.core.exceptions import InvalidAddressError
from swap_monitor.stream import build_swap_filter, event_topic, SWAP_EVENT_TOPIC

from conftest import POOL_ADDRESS, SWAP_TOPIC0


def test_swap_topic_matches_known_hash():
    assert SWAP_EVENT_TOPIC == SWAP_TOPIC0
    assert event_topic("Swap(address,address,int256,int256,uint160,uint128,int24)") == SWAP_TOPIC0


def test_filter_scoped_to_address_and_topic():
    log_filter = build_swap_filter(POOL_ADDRESS)

    assert log_filter.address == POOL_ADDRESS.lower()
    assert log_filter.topic0 == SWAP_TOPIC0


def test_filter_params_for_subscription():
    params = build_swap_filter(POOL_ADDRESS.lower()).to_params()

    assert params == {"address": POOL_ADDRESS, "topics": [SWAP_TOPIC0]}
    assert "fromBlock" not in params


def test_filter_accepts_unprefixed_address():
    assert build_swap_filter(POOL_ADDRESS[2:]).address == POOL_ADDRESS.lower()


@pytest.mark.parametrize("address", [
    "",
    "0x123",
    "not-an-address",
    "0x" + "g" * 40,
    POOL_ADDRESS + "00",
])
def test_invalid_address_rejected(address):
    with pytest.raises(InvalidAddressError):
        build_swap_filter(address)


def test_non_string_address_rejected():
    with pytest.raises(InvalidAddressError):
        build_swap_filter(None)
