"""Riemann query client for the FUSE filesystem."""

import logging
from typing import Callable, Optional

import trio

from .config import StoreConfig
from .errors import QueryFailure
from .models import Event

log = logging.getLogger(__name__)


def _default_client_factory(config: StoreConfig):
    """Create an unconnected riemann-client TCP client."""
    from riemann_client.client import Client
    from riemann_client.transport import TCPTransport

    return Client(TCPTransport(host=config.host, port=config.port, timeout=config.timeout))


class RiemannQueryExecutor:
    """Runs index queries over one shared Riemann TCP connection.

    riemann-client is blocking and its transport isn't safe for concurrent
    use, so each query runs in a worker thread while holding a trio lock.
    The connection opens on first use and is dropped after any failure so
    the next query reconnects.
    """

    def __init__(self, config: StoreConfig, client_factory: Optional[Callable] = None):
        self.config = config
        self._client_factory = client_factory or _default_client_factory
        self._client = None
        self._lock = trio.Lock()

    @property
    def connected(self) -> bool:
        return self._client is not None

    def _connect(self):
        client = self._client_factory(self.config)
        client.transport.connect()
        log.info(f"Connected to Riemann at {self.config.address}")
        return client

    def _disconnect(self) -> None:
        client, self._client = self._client, None
        if client is None:
            return
        try:
            client.transport.disconnect()
        except OSError as e:
            log.debug(f"Error while disconnecting from Riemann: {e}")

    def _query_blocking(self, expression: str) -> list[dict]:
        if self._client is None:
            self._client = self._connect()
        return self._client.query(expression)

    async def open(self) -> None:
        """Connect eagerly (startup); queries connect lazily otherwise."""
        async with self._lock:
            if self._client is None:
                self._client = await trio.to_thread.run_sync(self._connect)

    async def query(self, expression: str) -> list[Event]:
        """Run a query and return matching events, in index order."""
        log.debug(f"query: {expression}")
        async with self._lock:
            try:
                results = await trio.to_thread.run_sync(self._query_blocking, expression)
            except Exception as e:
                self._disconnect()
                raise QueryFailure(f"Riemann query {expression!r} failed: {e}") from e
        return [Event.from_dict(data) for data in results]

    async def close(self) -> None:
        async with self._lock:
            self._disconnect()
