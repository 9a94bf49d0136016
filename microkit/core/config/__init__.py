"""
Configuration Module

Centralized, type-safe configuration management for microkit.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Shared constants and enums

Usage:
------
```python
from microkit.core.config import get_settings
from microkit.core.config.constants import ListenerState

settings = get_settings()
mongo_url = settings.mongo.MONGO_URL
group = settings.nats.NATS_GROUP
```

Testing:
-------
```python
import os
from microkit.core.config import reload_settings

os.environ["NATS_GROUP"] = "billing-service"
settings = reload_settings()
assert settings.nats.NATS_GROUP == "billing-service"
```
"""

from microkit.core.config.constants import (
    CACHE_DEFAULT_TTL,
    DEFAULT_ENV_FILES,
    NATS_ACK_WAIT_SECONDS,
    ListenerState,
)
from microkit.core.config.settings import Settings, get_settings, reload_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "reload_settings",
    # Enums
    "ListenerState",
    # Constants
    "CACHE_DEFAULT_TTL",
    "DEFAULT_ENV_FILES",
    "NATS_ACK_WAIT_SECONDS",
]
