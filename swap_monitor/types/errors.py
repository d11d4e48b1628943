# swap_monitor/types/errors.py

from typing import Optional, Dict, Any
import hashlib
import msgspec
from msgspec import Struct

from .new import ErrorId


class ProcessingError(Struct):
    stage: str  # "connect", "filter", "stream", "extract", "decode", "store", "unknown"
    error_type: str  # exception class name
    message: str
    error_id: Optional[ErrorId] = None
    context: Optional[Dict[str, Any]] = None  # tx_hash, log_index, contract_address, etc.

    def __post_init__(self) -> None:
        if not self.error_id:
            self.error_id = self.generate_error_id()

    def generate_error_id(self) -> ErrorId:
        content_struct = {
            "stage": self.stage,
            "error_type": self.error_type,
            "message": self.message,
            "context": self.context or {},
        }
        content_bytes = msgspec.msgpack.encode(content_struct)
        hash_hex = hashlib.sha256(content_bytes).hexdigest()

        return ErrorId(hash_hex[:12])
