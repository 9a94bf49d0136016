"""
NATS Client

Owns one connection to a NATS server and exposes its JetStream context to
listeners and publishers.

Usage:
    client = NatsClient(settings.nats.NATS_URL, settings.nats.POD_NAME)
    await client.connect()
    client.exit_on_close()          # close on SIGINT/SIGTERM/SIGUSR1/SIGUSR2

    listener = NatsListener("orders.created", client, settings.nats.NATS_GROUP)
    await listener.listen()

    await client.wait_closed()
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import nats
from nats.aio.client import Client
from nats.errors import Error as NatsError
from nats.js import JetStreamContext
from nats.js.errors import NotFoundError

from microkit.core.exceptions import BrokerConnectionError, ConfigError, MessagingError
from microkit.core.lifecycle import install_shutdown_handlers
from microkit.core.logging import get_logger, mask_url

logger = get_logger(__name__)


class NatsClient:
    """
    A simple NATS client wrapper.

    Attributes:
        url: NATS server URL
        client_name: Name reported to the server (usually the pod name)
    """

    def __init__(
        self,
        url: str | None,
        client_name: str | None,
        connect: Callable[..., Awaitable[Client]] = nats.connect,
    ) -> None:
        self.url = (url or "").strip()
        self.client_name = (client_name or "").strip()
        self._connect = connect
        self._client: Client | None = None
        self._jetstream: JetStreamContext | None = None
        self._closed = asyncio.Event()

    @property
    def client(self) -> Client:
        """
        The underlying connected client.

        Raises:
            MessagingError: If not connected
        """
        if self._client is None:
            raise MessagingError("Client not connected")
        return self._client

    @property
    def jetstream(self) -> JetStreamContext:
        """
        The JetStream context of the connection.

        Raises:
            MessagingError: If not connected
        """
        if self._jetstream is None:
            self._jetstream = self.client.jetstream()
        return self._jetstream

    @property
    def is_connected(self) -> bool:
        return self._client is not None and not self._closed.is_set()

    async def connect(self) -> Client:
        """
        Open the connection to the NATS server.

        Returns:
            The connected client

        Raises:
            ConfigError: URL or client name missing
            BrokerConnectionError: Server unreachable
        """
        if not self.url:
            raise ConfigError("No NATS_URL defined").with_suggestion("Set NATS_URL")
        if not self.client_name:
            raise ConfigError("No POD_NAME defined").with_suggestion("Set POD_NAME")

        try:
            client = await self._connect(
                servers=[self.url],
                name=self.client_name,
                error_cb=self._on_error,
                disconnected_cb=self._on_disconnected,
                reconnected_cb=self._on_reconnected,
                closed_cb=self._on_closed,
            )
        except (NatsError, OSError, asyncio.TimeoutError) as e:
            logger.error(
                "Failed to connect to NATS",
                stage="NATS.CONNECT",
                url=mask_url(self.url),
                error=str(e),
            )
            raise BrokerConnectionError.from_exception(
                e, message=f"Failed to connect to NATS: {e}", url=mask_url(self.url)
            ) from e

        self._client = client
        self._jetstream = None
        self._closed.clear()

        logger.info(
            "NATS connected",
            stage="NATS.CONNECT",
            url=mask_url(self.url),
            client_name=self.client_name,
        )
        return client

    async def ensure_stream(self, name: str, subjects: Sequence[str]) -> None:
        """Create the JetStream stream ``name`` for ``subjects`` if it does not exist."""
        try:
            await self.jetstream.stream_info(name)
            return
        except NotFoundError:
            pass

        await self.jetstream.add_stream(name=name, subjects=list(subjects))
        logger.info("JetStream stream created", stage="NATS.STREAM", stream=name, subjects=list(subjects))

    async def try_close(self) -> None:
        """Close the connection, logging and discarding any error."""
        client = self._client
        if client is None or client.is_closed:
            return

        try:
            await client.close()
        except Exception as e:
            logger.warning("Error closing NATS connection", stage="NATS.CLOSE", error=str(e))

    def exit_on_close(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Close the connection when the process receives a shutdown signal."""
        install_shutdown_handlers(self.try_close, loop=loop)

    async def wait_closed(self) -> None:
        """Wait until the connection has been closed (by us or the server)."""
        await self._closed.wait()

    async def _on_error(self, error: Any) -> None:
        logger.error("NATS error", stage="NATS.ERROR", error=str(error))

    async def _on_disconnected(self) -> None:
        logger.warning("NATS disconnected", stage="NATS.DISCONNECT")

    async def _on_reconnected(self) -> None:
        logger.info("NATS reconnected", stage="NATS.RECONNECT")

    async def _on_closed(self) -> None:
        logger.info("NATS connection closed", stage="NATS.CLOSE")
        self._closed.set()
