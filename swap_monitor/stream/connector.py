# swap_monitor/stream/connector.py
"""
Persistent WebSocket connection to a ledger node.

One connection, one log subscription. The connector never reconnects:
a failed handshake or a dropped stream is reported as StreamConnectionError.
"""

from typing import Any, AsyncIterator, Callable, Mapping, Optional

from web3 import AsyncWeb3, WebSocketProvider

from ..core.exceptions import StreamConnectionError
from ..core.logging import LoggingMixin
from .filters import LogFilter


def default_web3_factory(endpoint_url: str, timeout: float) -> AsyncWeb3:
    # A single handshake attempt; web3 would otherwise retry with backoff
    return AsyncWeb3(WebSocketProvider(endpoint_url,
                                       request_timeout=timeout,
                                       max_connection_retries=1))


class NodeConnector(LoggingMixin):
    def __init__(self,
                 endpoint_url: str,
                 timeout: float = 30,
                 web3_factory: Callable[[str, float], Any] = default_web3_factory):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._web3_factory = web3_factory
        self._w3: Optional[AsyncWeb3] = None

    @property
    def connected(self) -> bool:
        return self._w3 is not None

    @property
    def w3(self) -> AsyncWeb3:
        if self._w3 is None:
            raise RuntimeError("Node not connected. Call connect() first.")
        return self._w3

    async def connect(self) -> AsyncWeb3:
        if self._w3 is not None:
            self.log_warning("Node connection already open")
            return self._w3

        self.log_info("Connecting to node", endpoint=self._redacted_endpoint())

        try:
            w3 = self._web3_factory(self.endpoint_url, self.timeout)
            await w3.provider.connect()
        except Exception as e:
            self.log_error("Node handshake failed",
                           endpoint=self._redacted_endpoint(), error=str(e))
            raise StreamConnectionError(
                f"Could not connect to {self._redacted_endpoint()}: {e}",
                endpoint=self._redacted_endpoint(),
            ) from e

        self._w3 = w3
        self.log_info("Node connection established", endpoint=self._redacted_endpoint())
        return w3

    async def subscribe_logs(self, log_filter: LogFilter) -> AsyncIterator[Mapping[str, Any]]:
        """Yield raw logs matching the filter, in delivery order, until the stream ends."""
        w3 = self.w3

        try:
            subscription_id = await w3.eth.subscribe("logs", log_filter.to_params())
        except Exception as e:
            raise StreamConnectionError(
                f"Log subscription rejected: {e}",
                contract_address=log_filter.address,
            ).with_stage("stream") from e

        self.log_info("Subscribed to swap logs",
                      contract_address=log_filter.address,
                      subscription_id=subscription_id)

        stream = w3.socket.process_subscriptions().__aiter__()
        while True:
            try:
                response = await stream.__anext__()
            except StopAsyncIteration:
                self.log_info("Log subscription stream ended", contract_address=log_filter.address)
                return
            except Exception as e:
                self.log_error("Log subscription stream failed", error=str(e))
                raise StreamConnectionError(
                    f"Subscription stream failed: {e}",
                    contract_address=log_filter.address,
                ).with_stage("stream") from e

            if response.get("subscription") not in (None, subscription_id):
                continue
            yield response["result"]

    async def disconnect(self) -> None:
        if self._w3 is None:
            return

        try:
            await self._w3.provider.disconnect()
            self.log_info("Node connection closed")
        except Exception as e:
            self.log_warning("Error closing node connection", error=str(e))
        finally:
            self._w3 = None

    async def __aenter__(self) -> 'NodeConnector':
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    def _redacted_endpoint(self) -> str:
        # Infura style URLs carry the API key as the last path segment
        scheme, sep, rest = self.endpoint_url.partition("://")
        host = rest.split("/", 1)[0]
        return f"{scheme}{sep}{host}" if sep else host
