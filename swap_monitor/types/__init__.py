# swap_monitor/types/__init__.py

from .new import (
    EvmAddress,
    EvmHash,
    IntStr,
    ErrorId,
)

from .constants import (
    SWAP_EVENT_SIGNATURE,
    SWAP_PAYLOAD_TYPES,
    SWAP_PAYLOAD_SIZE,
    ABI_WORD_SIZE,
    MIN_SWAP_TOPICS,
    ADDRESS_SIZE,
    HASH_SIZE,
    ZERO_HASH,
)

from .config import (
    DatabaseConfig,
    RpcConfig,
)

from .swap import (
    SwapPayload,
    SubscribedLog,
    IngestedRecord,
)

from .errors import (
    ProcessingError,
)
