# swap_monitor/types/swap.py

from typing import Any, Dict, Optional

from msgspec import Struct

from .new import EvmAddress, EvmHash, IntStr


class SwapPayload(Struct, frozen=True):
    """Non-indexed fields of one swap event, decoded as a unit."""
    amount0: int  # int256
    amount1: int  # int256
    sqrt_price: int  # uint160 slot, Q64.96
    liquidity: int  # uint128
    tick: int  # int24


class SubscribedLog(Struct, frozen=True):
    """Subset of an eth_subscription log the pipeline relies on."""
    topics: list[bytes]
    data: bytes
    transaction_hash: Optional[bytes] = None
    address: Optional[EvmAddress] = None
    block_number: Optional[int] = None
    log_index: Optional[int] = None


class IngestedRecord(Struct, frozen=True):
    tx_hash: EvmHash
    sender: EvmAddress
    receiver: EvmAddress
    payload: SwapPayload

    def to_row(self) -> Dict[str, Any]:
        """Column mapping for the logs table; wide integers kept as text."""
        return {
            "tx_hash": self.tx_hash,
            "sender_address": self.sender,
            "receiver_address": self.receiver,
            "amount0": IntStr(str(self.payload.amount0)),
            "amount1": IntStr(str(self.payload.amount1)),
            "sqrt_price": IntStr(str(self.payload.sqrt_price)),
            "liquidity": IntStr(str(self.payload.liquidity)),
            "tick": self.payload.tick,
        }

    def describe(self) -> str:
        return (
            f"new | tx_hash: {self.tx_hash}, sender: {self.sender}, receiver: {self.receiver}, "
            f"amount0: {self.payload.amount0}, amount1: {self.payload.amount1}, "
            f"sqrt_price: {self.payload.sqrt_price}, liquidity: {self.payload.liquidity}, "
            f"tick: {self.payload.tick}"
        )
