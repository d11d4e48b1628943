# swap_monitor/stream/filters.py

from typing import Any, Dict

from eth_utils import is_hex_address, to_checksum_address
from msgspec import Struct
from web3 import Web3

from ..core.exceptions import InvalidAddressError
from ..types import EvmAddress, EvmHash, SWAP_EVENT_SIGNATURE


def event_topic(signature: str) -> EvmHash:
    return EvmHash(Web3.to_hex(Web3.keccak(text=signature)))


SWAP_EVENT_TOPIC = event_topic(SWAP_EVENT_SIGNATURE)


class LogFilter(Struct, frozen=True):
    """Live log subscription scoped to one contract and one event."""
    address: EvmAddress
    topic0: EvmHash

    def to_params(self) -> Dict[str, Any]:
        # No block range: eth_subscribe only delivers logs from now on
        return {
            "address": to_checksum_address(self.address),
            "topics": [self.topic0],
        }


def build_swap_filter(contract_address: str) -> LogFilter:
    if not isinstance(contract_address, str) or not is_hex_address(contract_address.strip()):
        raise InvalidAddressError(
            f"Invalid contract address: {contract_address!r}",
            contract_address=contract_address if isinstance(contract_address, str) else None,
        )

    address = to_checksum_address(contract_address.strip()).lower()
    return LogFilter(address=EvmAddress(address), topic0=SWAP_EVENT_TOPIC)
