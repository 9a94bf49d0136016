"""
Durable NATS Listener

Subscribes to a subject with a durable, manual-ack JetStream consumer and
hands decoded payloads to a caller-supplied handler.

Delivery policy per message:
    1. Payload not UTF-8 JSON (or not the declared type) -> ack, drop
    2. No handler registered                           -> ack
    3. Handler raises / its awaitable fails            -> no ack (redelivered
                                                          after ack_wait)
    4. Handler completes                               -> ack iff force was
                                                          requested, or
                                                          auto_ack and no
                                                          no_ack() call

Log entries written while a delivery is processed carry its correlation id
(subject:stream-sequence).

Handlers record their decision on the per-delivery context or return one:

    async def on_order(ctx: DeliveryContext[OrderCreated]) -> None:
        if not await billing.charge(ctx.message):
            ctx.no_ack()

    listener = NatsListener("orders.created", client, "billing-service",
                            codec=MessageCodec(OrderCreated))
    listener.on_message = on_order
    await listener.listen()
"""

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from nats.aio.msg import Msg
from nats.errors import NotJSMessageError
from nats.js import JetStreamContext
from nats.js.api import AckPolicy, ConsumerConfig, DeliverPolicy

from microkit.core.config.constants import NATS_ACK_WAIT_SECONDS, ListenerState
from microkit.core.exceptions import ConfigError, HandlerError, MessagingError
from microkit.core.logging import clear_correlation_id, get_logger, set_correlation_id
from microkit.infrastructure.messaging.codec import MessageCodec
from microkit.infrastructure.messaging.nats_client import NatsClient

logger = get_logger(__name__)

TEvent = TypeVar("TEvent")


@dataclass(frozen=True)
class Ack:
    """Acknowledge the delivery; ``force`` acknowledges even when auto_ack is off."""

    force: bool = False


@dataclass(frozen=True)
class NoAck:
    """Leave the delivery unacknowledged so the broker redelivers it."""


AckDecision = Union[Ack, NoAck]


def should_ack(decision: AckDecision, auto_ack: bool) -> bool:
    """Final ack rule for a handler that completed without error."""
    if isinstance(decision, Ack):
        return decision.force or auto_ack
    return False


@dataclass(frozen=True)
class SubscriptionOptions:
    """
    Durable, manual-ack subscription configuration.

    Fixed at listener construction.
    """

    durable_name: str
    deliver_all_available: bool = True
    manual_ack: bool = True
    ack_wait: float = NATS_ACK_WAIT_SECONDS

    def to_consumer_config(self) -> ConsumerConfig:
        return ConsumerConfig(
            durable_name=self.durable_name,
            deliver_policy=DeliverPolicy.ALL if self.deliver_all_available else DeliverPolicy.NEW,
            ack_policy=AckPolicy.EXPLICIT if self.manual_ack else AckPolicy.NONE,
            ack_wait=self.ack_wait,
        )


class DeliveryContext(Generic[TEvent]):
    """
    One delivery as seen by a handler.

    A force request survives a later no_ack(); only a later ack() call
    replaces it.

    Attributes:
        message: Decoded payload
        raw_message: The broker message
    """

    __slots__ = ("message", "raw_message", "_ack_requested", "_force_requested")

    def __init__(self, message: TEvent, raw_message: Msg) -> None:
        self.message = message
        self.raw_message = raw_message
        self._ack_requested = True
        self._force_requested = False

    @property
    def decision(self) -> AckDecision:
        """Current acknowledgment decision (default: Ack())."""
        if self._force_requested:
            return Ack(force=True)
        return Ack() if self._ack_requested else NoAck()

    def ack(self, force: bool = False) -> None:
        """Mark the delivery for acknowledgment."""
        self._ack_requested = True
        self._force_requested = force

    def no_ack(self) -> None:
        """Mark the delivery for redelivery (unless a forced ack was requested)."""
        self._ack_requested = False


MessageHandler = Callable[
    [DeliveryContext[TEvent]],
    Union[AckDecision, None, Awaitable[Union[AckDecision, None]]],
]


class NatsListener(Generic[TEvent]):
    """
    A durable NATS listener.

    Attributes:
        subject: Subject to subscribe to
        client: NatsClient providing the connection
        group_name: Deployment group; durable name and queue group
        codec: Payload decoder
        auto_ack: Acknowledge completed deliveries unless the handler opts out
        on_message: Handler for decoded messages (optional)
        subscription_options: Fixed subscription configuration
    """

    def __init__(
        self,
        subject: str,
        client: NatsClient,
        group_name: str | None,
        codec: MessageCodec[TEvent] | None = None,
    ) -> None:
        subject = (subject or "").strip()
        if not subject:
            raise ConfigError("No NATS subject defined")

        group_name = (group_name or "").strip()
        if not group_name:
            raise ConfigError("No NATS_GROUP defined").with_suggestion("Set NATS_GROUP")

        self.subject = subject
        self.client = client
        self.group_name = group_name
        self.codec: MessageCodec[TEvent] = codec or MessageCodec()
        self.auto_ack = True
        self.on_message: MessageHandler | None = None
        self.subscription_options = SubscriptionOptions(durable_name=group_name)

        self._state = ListenerState.CONSTRUCTED
        self._subscription: JetStreamContext.PushSubscription | None = None

    @property
    def state(self) -> ListenerState:
        return self._state

    @property
    def subscription(self) -> JetStreamContext.PushSubscription | None:
        return self._subscription

    async def listen(self, stream: str | None = None) -> JetStreamContext.PushSubscription:
        """
        Start listening.

        Args:
            stream: JetStream stream bound to the subject (looked up by
                subject when omitted)

        Returns:
            The new subscription

        Raises:
            MessagingError: Already listening, or the client is not connected
        """
        if self._state is not ListenerState.CONSTRUCTED:
            raise MessagingError(
                f"Listener for '{self.subject}' cannot subscribe in state {self._state.value}"
            )

        subscription = await self.client.jetstream.subscribe(
            self.subject,
            queue=self.group_name,
            durable=self.group_name,
            stream=stream,
            cb=self._handle_subscription_message,
            manual_ack=self.subscription_options.manual_ack,
            config=self.subscription_options.to_consumer_config(),
        )

        self._subscription = subscription
        self._state = ListenerState.SUBSCRIBED

        logger.info(
            "NATS listener subscribed",
            stage="NATS.LISTEN",
            subject=self.subject,
            group=self.group_name,
        )
        return subscription

    async def unsubscribe(self) -> None:
        """Stop receiving deliveries. Errors are logged and discarded."""
        subscription = self._subscription
        self._subscription = None
        self._state = ListenerState.UNSUBSCRIBED

        if subscription is None:
            return

        try:
            await subscription.unsubscribe()
        except Exception as e:
            logger.warning(
                "Error unsubscribing NATS listener",
                stage="NATS.UNSUBSCRIBE",
                subject=self.subject,
                error=str(e),
            )

    async def _handle_subscription_message(self, raw_message: Msg) -> None:
        set_correlation_id(self._delivery_id(raw_message))
        try:
            await self._process(raw_message)
        finally:
            clear_correlation_id()

    def _delivery_id(self, raw_message: Msg) -> str:
        """subject:stream-sequence, or just the subject for non-JetStream messages."""
        try:
            sequence = raw_message.metadata.sequence.stream
        except (NotJSMessageError, AttributeError):
            return self.subject
        return f"{self.subject}:{sequence}"

    async def _process(self, raw_message: Msg) -> None:
        decoded = self.codec.decode(raw_message.data)
        if not decoded.ok:
            # malformed payloads are never redelivered
            logger.warning(
                "Dropping undecodable message",
                stage="NATS.DECODE",
                subject=self.subject,
                error=decoded.error.message,
                details=decoded.error.details,
            )
            await raw_message.ack()
            return

        handler = self.on_message
        if handler is None:
            await raw_message.ack()
            return

        context = DeliveryContext(decoded.value, raw_message)
        try:
            result = handler(context)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            error = HandlerError.from_exception(
                e, message=f"Handler for '{self.subject}' failed: {e}", subject=self.subject
            )
            logger.error(
                "Message handler failed, message will be redelivered",
                stage="NATS.HANDLER",
                exc_info=True,
                **error.log_fields(),
            )
            return

        decision = result if isinstance(result, (Ack, NoAck)) else context.decision
        if should_ack(decision, self.auto_ack):
            await raw_message.ack()
