"""
Core Module

Foundational components: configuration, logging, exceptions and small
helpers shared by the infrastructure adapters.
"""

from .exceptions import (
    BrokerConnectionError,
    CacheConnectionError,
    CacheError,
    ConfigError,
    DatabaseConnectionError,
    DatabaseError,
    DecodeError,
    HandlerError,
    MessagingError,
    MicrokitError,
    PublishError,
)
from .logging import (
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    set_correlation_id,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "MicrokitError",
    "ConfigError",
    "CacheError",
    "CacheConnectionError",
    "DatabaseError",
    "DatabaseConnectionError",
    "MessagingError",
    "BrokerConnectionError",
    "PublishError",
    "DecodeError",
    "HandlerError",
]
