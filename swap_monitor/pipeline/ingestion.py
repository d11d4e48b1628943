# swap_monitor/pipeline/ingestion.py

from enum import Enum
from typing import Any, Callable, Mapping, Optional

from ..core.exceptions import MalformedEventError, SwapMonitorError
from ..core.logging import LoggingMixin
from ..database.repository import SwapLogRepository
from ..decode.swap_decoder import SwapDecoder
from ..stream.connector import NodeConnector
from ..stream.filters import LogFilter
from ..stream.logs import to_subscribed_log
from ..types import (
    EvmAddress,
    EvmHash,
    IngestedRecord,
    ProcessingError,
    SubscribedLog,
    ADDRESS_SIZE,
    HASH_SIZE,
    MIN_SWAP_TOPICS,
    ZERO_HASH,
)


RecordCallback = Callable[[IngestedRecord], None]


class LoopState(str, Enum):
    LISTENING = "listening"
    TERMINATED = "terminated"


def topic_to_address(topic: bytes) -> EvmAddress:
    # Indexed addresses are left-padded to 32 bytes; the address is the low 20
    return EvmAddress("0x" + topic[-ADDRESS_SIZE:].hex())


def format_tx_hash(tx_hash: Optional[bytes]) -> EvmHash:
    if not tx_hash:
        return ZERO_HASH
    if len(tx_hash) != HASH_SIZE:
        raise MalformedEventError(f"Transaction hash must be {HASH_SIZE} bytes, got {len(tx_hash)}")
    return EvmHash("0x" + tx_hash.hex())


def extract_route(log: SubscribedLog) -> tuple[EvmHash, EvmAddress, EvmAddress]:
    """Transaction hash, sender and receiver of a swap log."""
    if len(log.topics) < MIN_SWAP_TOPICS:
        raise MalformedEventError(
            f"Swap log needs {MIN_SWAP_TOPICS} topics, got {len(log.topics)}",
            block_number=log.block_number,
            log_index=log.log_index,
        )

    for position in (1, 2):
        if len(log.topics[position]) != HASH_SIZE:
            raise MalformedEventError(
                f"Topic {position} must be {HASH_SIZE} bytes, got {len(log.topics[position])}",
                block_number=log.block_number,
                log_index=log.log_index,
            )

    return (
        format_tx_hash(log.transaction_hash),
        topic_to_address(log.topics[1]),
        topic_to_address(log.topics[2]),
    )


class IngestionLoop(LoggingMixin):
    """
    Single consumer of one swap log subscription.

    Each event is extracted, decoded and stored before the next one is
    awaited. The first failure terminates the loop: it is kept on
    ``failure`` and re-raised to the owner. Nothing is skipped or retried.
    """

    def __init__(self,
                 connector: NodeConnector,
                 log_filter: LogFilter,
                 repository: SwapLogRepository,
                 decoder: Optional[SwapDecoder] = None,
                 on_record: Optional[RecordCallback] = None):
        self.connector = connector
        self.log_filter = log_filter
        self.repository = repository
        self.decoder = decoder or SwapDecoder()
        self.on_record = on_record

        self.state = LoopState.LISTENING
        self.failure: Optional[ProcessingError] = None
        self.events_stored = 0

    def process_log(self, raw_log: Mapping[str, Any]) -> IngestedRecord:
        log = to_subscribed_log(raw_log)
        tx_hash, sender, receiver = extract_route(log)

        context = self.log_transaction_context(tx_hash, log_index=log.log_index,
                                               block_number=log.block_number)
        try:
            payload = self.decoder.decode(log.data)
        except SwapMonitorError as e:
            e.context.update({k: v for k, v in context.items() if v is not None})
            raise

        record = IngestedRecord(
            tx_hash=tx_hash,
            sender=sender,
            receiver=receiver,
            payload=payload,
        )
        self.repository.append(record)
        self.log_debug("Swap log ingested", **context)
        return record

    async def run(self) -> int:
        """Consume the subscription until it ends. Returns the number of stored events."""
        if self.state is LoopState.TERMINATED:
            raise RuntimeError("Ingestion loop already terminated")

        try:
            if not self.connector.connected:
                await self.connector.connect()

            self.log_info("Ingestion loop listening", contract_address=self.log_filter.address)

            async for raw_log in self.connector.subscribe_logs(self.log_filter):
                record = self.process_log(raw_log)
                self.events_stored += 1
                if self.on_record is not None:
                    self.on_record(record)
        except SwapMonitorError as e:
            self._terminate(e.to_processing_error())
            raise
        except Exception as e:
            self._terminate(ProcessingError(
                stage="unknown",
                error_type=type(e).__name__,
                message=str(e),
            ))
            raise

        self._terminate()
        return self.events_stored

    def _terminate(self, failure: Optional[ProcessingError] = None) -> None:
        self.state = LoopState.TERMINATED
        self.failure = failure

        if failure is None:
            self.log_info("Subscription ended, ingestion loop terminated",
                          events_stored=self.events_stored)
        else:
            self.log_error("Ingestion loop terminated on failure",
                           stage=failure.stage,
                           error=failure.message,
                           events_stored=self.events_stored,
                           **(failure.context or {}))
