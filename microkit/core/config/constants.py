"""
System Constants and Enumerations

This module defines constants and enumerations shared by microkit
components.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for magic numbers
- Type-safe enums for state management
"""

from enum import Enum

# ============================================================================
# Messaging
# ============================================================================

# Seconds the broker waits for an acknowledgment before redelivering
NATS_ACK_WAIT_SECONDS = 60


class ListenerState(str, Enum):
    """
    Lifecycle of a NatsListener.

    CONSTRUCTED: Created, not yet subscribed
    SUBSCRIBED: Receiving deliveries
    UNSUBSCRIBED: Subscription closed; terminal
    """

    CONSTRUCTED = "constructed"
    SUBSCRIBED = "subscribed"
    UNSUBSCRIBED = "unsubscribed"


# ============================================================================
# Cache
# ============================================================================

# Default time-to-live for cache entries (1 hour)
CACHE_DEFAULT_TTL = 3600


# ============================================================================
# Environment
# ============================================================================

# Env files read by load_env(), in order; later files override earlier ones
DEFAULT_ENV_FILES = (".env", ".env.local", ".env.tests")
