"""
Messaging Exceptions

All exceptions related to the NATS client, listener and publisher.
"""

from microkit.core.exceptions.base import MicrokitError


class MessagingError(MicrokitError):
    """Base exception for message broker errors."""
    pass


class BrokerConnectionError(MessagingError):
    """
    Raised when unable to connect to the message broker.

    Common causes:
    - NATS server is down
    - Network connectivity issues
    - Incorrect URL configuration
    """
    pass


class PublishError(MessagingError):
    """
    Raised when the broker rejects or does not acknowledge a published message.
    """
    pass


class DecodeError(MessagingError):
    """
    Raised when a message payload is not UTF-8 JSON of the expected shape.

    Internal to the listener: the message is acknowledged and dropped,
    the handler never sees it.
    """
    pass


class HandlerError(MessagingError):
    """
    Wraps an exception raised by a caller-supplied message handler.

    Logged and converted into "do not acknowledge"; never propagated
    to the broker client.
    """
    pass
