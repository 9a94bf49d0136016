"""
Database Module

Reconnect-aware MongoDB connection provider and collection helpers.
"""

from .mongo_database import MongoDatabase
from .mongo_provider import (
    ConnectionHandle,
    MongoClientOptions,
    MongoConnectionProvider,
    mongo_options_from_settings,
)

__all__ = [
    "ConnectionHandle",
    "MongoClientOptions",
    "MongoConnectionProvider",
    "MongoDatabase",
    "mongo_options_from_settings",
]
