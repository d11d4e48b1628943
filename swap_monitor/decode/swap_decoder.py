# swap_monitor/decode/swap_decoder.py

from typing import Union

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from hexbytes import HexBytes

from ..core.exceptions import DecodeError
from ..core.logging import LoggingMixin
from ..types import SwapPayload, SWAP_PAYLOAD_TYPES, SWAP_PAYLOAD_SIZE


PayloadData = Union[bytes, bytearray, str]


def _to_bytes(data: PayloadData) -> bytes:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    if isinstance(data, str):
        try:
            return bytes(HexBytes(data))
        except ValueError as e:
            raise DecodeError(f"Payload is not valid hex: {e}") from e
    raise DecodeError(f"Unsupported payload type: {type(data).__name__}")


def decode_swap_payload(data: PayloadData) -> SwapPayload:
    """
    Decode the non-indexed swap fields (int256, int256, uint160, uint128, int24).

    The payload must be exactly five ABI words. Nothing is returned unless
    every field decodes.
    """
    raw = _to_bytes(data)

    if len(raw) != SWAP_PAYLOAD_SIZE:
        raise DecodeError(
            f"Swap payload must be {SWAP_PAYLOAD_SIZE} bytes, got {len(raw)}",
            payload_size=len(raw),
        )

    try:
        amount0, amount1, sqrt_price, liquidity, tick = decode(list(SWAP_PAYLOAD_TYPES), raw)
    except DecodingError as e:
        raise DecodeError(f"Malformed swap payload: {e}") from e

    return SwapPayload(
        amount0=amount0,
        amount1=amount1,
        sqrt_price=sqrt_price,
        liquidity=liquidity,
        tick=tick,
    )


def encode_swap_payload(payload: SwapPayload) -> bytes:
    try:
        return encode(
            list(SWAP_PAYLOAD_TYPES),
            [payload.amount0, payload.amount1, payload.sqrt_price, payload.liquidity, payload.tick],
        )
    except EncodingError as e:
        raise DecodeError(f"Swap payload out of range: {e}") from e


class SwapDecoder(LoggingMixin):
    def decode(self, data: PayloadData) -> SwapPayload:
        try:
            payload = decode_swap_payload(data)
        except DecodeError as e:
            self.log_error("Swap payload decode failed", error=e.message)
            raise

        self.log_debug("Swap payload decoded", tick=payload.tick)
        return payload
