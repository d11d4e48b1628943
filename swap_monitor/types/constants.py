# swap_monitor/types/constants.py

from .new import EvmHash


SWAP_EVENT_SIGNATURE = "Swap(address,address,int256,int256,uint160,uint128,int24)"

# Non-indexed part of the swap event, in declaration order
SWAP_PAYLOAD_TYPES = ("int256", "int256", "uint160", "uint128", "int24")

ABI_WORD_SIZE = 32
SWAP_PAYLOAD_SIZE = ABI_WORD_SIZE * len(SWAP_PAYLOAD_TYPES)

# topic 0 is the signature hash, sender and receiver follow
MIN_SWAP_TOPICS = 3

ADDRESS_SIZE = 20
HASH_SIZE = 32

ZERO_HASH = EvmHash("0x" + "0" * (HASH_SIZE * 2))
