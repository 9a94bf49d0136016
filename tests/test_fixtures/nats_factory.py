"""
NATS Test Factory

Fake broker messages, JetStream contexts and connected clients.
"""

from unittest.mock import AsyncMock, MagicMock

from nats.js.api import PubAck


class NatsTestFactory:
    """Factory for creating NATS test objects."""

    @staticmethod
    def message(
        data: bytes | str, subject: str = "orders.created", sequence: int = 1
    ) -> MagicMock:
        """Create a delivered JetStream message with an awaitable ack()."""
        if isinstance(data, str):
            data = data.encode("utf-8")

        msg = MagicMock(name="Msg")
        msg.subject = subject
        msg.data = data
        msg.ack = AsyncMock()
        msg.metadata.sequence.stream = sequence
        return msg

    @staticmethod
    def jetstream(stream: str = "ORDERS", seq: int = 1) -> MagicMock:
        """Create a JetStream context whose subscribe/publish succeed."""
        subscription = MagicMock(name="PushSubscription")
        subscription.unsubscribe = AsyncMock()

        js = MagicMock(name="JetStreamContext")
        js.subscribe = AsyncMock(return_value=subscription)
        js.publish = AsyncMock(return_value=PubAck(stream=stream, seq=seq))
        js.stream_info = AsyncMock()
        js.add_stream = AsyncMock()
        return js

    @staticmethod
    def connected_client(jetstream: MagicMock | None = None) -> MagicMock:
        """Create a NatsClient stand-in exposing ``jetstream``."""
        from microkit.infrastructure.messaging.nats_client import NatsClient

        client = MagicMock(spec=NatsClient)
        client.jetstream = jetstream or NatsTestFactory.jetstream()
        client.is_connected = True
        return client

    @staticmethod
    def raw_connection() -> MagicMock:
        """Create the object nats.connect() would return."""
        connection = MagicMock(name="Client")
        connection.is_closed = False
        connection.close = AsyncMock()
        connection.jetstream = MagicMock(return_value=NatsTestFactory.jetstream())
        return connection
