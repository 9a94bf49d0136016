"""
Messaging Module

NATS JetStream client, durable at-least-once listener and publisher.
"""

from .codec import DecodeResult, MessageCodec
from .listener import (
    Ack,
    AckDecision,
    DeliveryContext,
    NatsListener,
    NoAck,
    SubscriptionOptions,
    should_ack,
)
from .nats_client import NatsClient
from .publisher import NatsPublisher

__all__ = [
    "Ack",
    "AckDecision",
    "DecodeResult",
    "DeliveryContext",
    "MessageCodec",
    "NatsClient",
    "NatsListener",
    "NatsPublisher",
    "NoAck",
    "SubscriptionOptions",
    "should_ack",
]
