"""
MongoDB Test Factory

Fake Motor clients whose ping, liveness probe and close can be controlled
per test.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock


class FakeMotorDatabase:
    """Selected database of a FakeMotorClient."""

    def __init__(self, name: str):
        self.name = name
        self.list_collection_names = AsyncMock(return_value=["orders"])
        self.collections: dict[str, MagicMock] = {}

    def __getitem__(self, collection: str) -> MagicMock:
        if collection not in self.collections:
            self.collections[collection] = MagicMock(name=f"{self.name}.{collection}")
        return self.collections[collection]


class FakeMotorClient:
    """Stands in for AsyncIOMotorClient(url, **kwargs)."""

    def __init__(self, url: str, **kwargs):
        self.url = url
        self.kwargs = kwargs
        self.admin = MagicMock()
        self.admin.command = AsyncMock(return_value={"ok": 1.0})
        self.close = MagicMock()
        self.databases: dict[str, FakeMotorDatabase] = {}

    def __getitem__(self, name: str) -> FakeMotorDatabase:
        if name not in self.databases:
            self.databases[name] = FakeMotorDatabase(name)
        return self.databases[name]


class FakeClientFactory:
    """Records every client it creates."""

    def __init__(self, ping_error: Exception | None = None, ping_delay: float = 0.0):
        self.clients: list[FakeMotorClient] = []
        self.ping_error = ping_error
        self.ping_delay = ping_delay

    @property
    def calls(self) -> int:
        return len(self.clients)

    def __call__(self, url: str, **kwargs) -> FakeMotorClient:
        client = FakeMotorClient(url, **kwargs)

        async def ping(command):
            if self.ping_delay:
                await asyncio.sleep(self.ping_delay)
            if self.ping_error is not None:
                raise self.ping_error
            return {"ok": 1.0}

        client.admin.command = AsyncMock(side_effect=ping)
        self.clients.append(client)
        return client


class MongoTestFactory:
    """Factory for creating MongoDB test objects."""

    @staticmethod
    def client_factory(ping_error: Exception | None = None, ping_delay: float = 0.0) -> FakeClientFactory:
        """Create a client factory; ``ping_error`` makes every ping fail."""
        return FakeClientFactory(ping_error=ping_error, ping_delay=ping_delay)

    @staticmethod
    def break_probe(client: FakeMotorClient, database: str, error: Exception | None = None) -> None:
        """Make the liveness probe of an existing client fail."""
        if error is None:
            from pymongo.errors import AutoReconnect

            error = AutoReconnect("connection closed")
        client[database].list_collection_names.side_effect = error
