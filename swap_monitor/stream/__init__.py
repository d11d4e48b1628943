# swap_monitor/stream/__init__.py

from .connector import NodeConnector
from .filters import LogFilter, build_swap_filter, event_topic, SWAP_EVENT_TOPIC
from .logs import to_subscribed_log
