"""
Exception Module

Structured exception hierarchy for microkit.
All exceptions are organized by theme.

Module Structure:
-----------------
- **base.py**: MicrokitError base class + ConfigError
- **database.py**: Document store exceptions (MongoDB)
- **messaging.py**: Message broker exceptions (NATS)
- **cache.py**: Cache-related exceptions (Redis)

Usage:
------
```python
# Import specific exceptions
from microkit.core.exceptions import ConfigError, DatabaseConnectionError

# Or import by category
from microkit.core.exceptions.messaging import MessagingError, PublishError
```
"""

# Base exception
from microkit.core.exceptions.base import ConfigError, MicrokitError

# Cache exceptions
from microkit.core.exceptions.cache import CacheConnectionError, CacheError

# Database exceptions
from microkit.core.exceptions.database import DatabaseConnectionError, DatabaseError

# Messaging exceptions
from microkit.core.exceptions.messaging import (
    BrokerConnectionError,
    DecodeError,
    HandlerError,
    MessagingError,
    PublishError,
)

__all__ = [
    # Base
    "MicrokitError",
    "ConfigError",
    # Cache
    "CacheError",
    "CacheConnectionError",
    # Database
    "DatabaseError",
    "DatabaseConnectionError",
    # Messaging
    "MessagingError",
    "BrokerConnectionError",
    "PublishError",
    "DecodeError",
    "HandlerError",
]
