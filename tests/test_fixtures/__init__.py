"""
Test Fixtures Package

Fakes for the MongoDB driver, NATS messages and Redis used across the unit
tests.
"""

from .cache_factory import CacheTestFactory
from .mongo_factory import FakeMotorClient, MongoTestFactory
from .nats_factory import NatsTestFactory

__all__ = ["CacheTestFactory", "FakeMotorClient", "MongoTestFactory", "NatsTestFactory"]
