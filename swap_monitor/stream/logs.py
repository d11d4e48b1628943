# swap_monitor/stream/logs.py

from typing import Any, Mapping, Optional, Union

from hexbytes import HexBytes

from ..core.exceptions import MalformedEventError
from ..types import EvmAddress, SubscribedLog


HexLike = Union[bytes, bytearray, str]


def _as_bytes(value: HexLike, field: str) -> bytes:
    try:
        return bytes(HexBytes(value))
    except (TypeError, ValueError) as e:
        raise MalformedEventError(f"Log field {field} is not hex data: {e}") from e


def _as_int(value: Union[int, str, None]) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    return int(value, 16) if value.startswith("0x") else int(value)


def to_subscribed_log(raw: Mapping[str, Any]) -> SubscribedLog:
    """Normalize an eth_subscription log (web3 AttributeDict or raw JSON) into a SubscribedLog."""
    try:
        topics = raw["topics"]
        data = raw["data"]
    except KeyError as e:
        raise MalformedEventError(f"Log is missing field {e.args[0]!r}") from e

    tx_hash = raw.get("transactionHash")
    address = raw.get("address")

    try:
        block_number = _as_int(raw.get("blockNumber"))
        log_index = _as_int(raw.get("logIndex"))
    except (TypeError, ValueError) as e:
        raise MalformedEventError(f"Log position fields are malformed: {e}") from e

    return SubscribedLog(
        topics=[_as_bytes(topic, "topics") for topic in topics],
        data=_as_bytes(data, "data"),
        transaction_hash=_as_bytes(tx_hash, "transactionHash") if tx_hash is not None else None,
        address=EvmAddress(address.lower()) if address else None,
        block_number=block_number,
        log_index=log_index,
    )
