# swap_monitor/decode/__init__.py

from .swap_decoder import SwapDecoder, decode_swap_payload, encode_swap_payload
