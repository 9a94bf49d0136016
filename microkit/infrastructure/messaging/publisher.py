"""
NATS Publisher

Publishes JSON-encoded events to a subject and waits for the broker's
publish acknowledgment.
"""

from typing import Generic, TypeVar

from nats.errors import Error as NatsError
from nats.js.api import PubAck

from microkit.core.exceptions import ConfigError, PublishError
from microkit.core.logging import get_logger
from microkit.infrastructure.messaging.codec import MessageCodec
from microkit.infrastructure.messaging.nats_client import NatsClient

logger = get_logger(__name__)

TEvent = TypeVar("TEvent")


class NatsPublisher(Generic[TEvent]):
    """A basic NATS event publisher."""

    def __init__(
        self,
        subject: str,
        client: NatsClient,
        codec: MessageCodec[TEvent] | None = None,
    ) -> None:
        subject = (subject or "").strip()
        if not subject:
            raise ConfigError("No NATS subject defined")

        self.subject = subject
        self.client = client
        self.codec: MessageCodec[TEvent] = codec or MessageCodec()

    async def publish(self, data: TEvent) -> PubAck:
        """
        Publish one event.

        Args:
            data: JSON-serializable value or pydantic model

        Returns:
            The broker's publish acknowledgment (stream and sequence)

        Raises:
            PublishError: The broker rejected or did not acknowledge the message
        """
        payload = self.codec.encode(data)

        try:
            ack = await self.client.jetstream.publish(self.subject, payload)
        except NatsError as e:
            logger.error("Publish failed", stage="NATS.PUBLISH", subject=self.subject, error=str(e))
            raise PublishError.from_exception(
                e, message=f"Failed to publish to '{self.subject}': {e}", subject=self.subject
            ) from e

        logger.debug(
            "Message published",
            stage="NATS.PUBLISH",
            subject=self.subject,
            stream=ack.stream,
            seq=ack.seq,
        )
        return ack
