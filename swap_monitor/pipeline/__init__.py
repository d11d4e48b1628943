# swap_monitor/pipeline/__init__.py

from .ingestion import IngestionLoop, LoopState, extract_route, topic_to_address, format_tx_hash
from .runner import run_monitor
