"""
MongoDB Database Facade

Collection helpers on top of MongoConnectionProvider. Every operation asks
the provider for a verified connection first, so a dropped connection is
replaced transparently between calls.

Usage:
    db = MongoDatabase(provider)

    await db.insert_one("orders", {"orderId": 42})
    orders = await db.find("orders", {"status": "open"}, sort=[("createdAt", -1)])
    total = await db.count("orders")
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, TypeVar

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.results import DeleteResult, InsertManyResult, InsertOneResult, UpdateResult

from microkit.infrastructure.database.mongo_provider import MongoConnectionProvider

TResult = TypeVar("TResult")

WithClientAction = Callable[[AsyncIOMotorClient, AsyncIOMotorDatabase], Awaitable[TResult]]


class MongoDatabase:
    """Convenience operations against the provider's selected database."""

    def __init__(self, provider: MongoConnectionProvider) -> None:
        self._provider = provider

    async def with_client(self, action: WithClientAction) -> Any:
        """
        Run ``action(client, db)`` with a verified connection.

        Args:
            action: Coroutine function receiving the driver client and the
                selected database

        Returns:
            Whatever ``action`` returns
        """
        handle = await self._provider.get_connection()
        return await action(handle.client, handle.db)

    async def count(
        self, collection: str, filter: Mapping[str, Any] | None = None, **options
    ) -> int:
        """
        Count documents matching ``filter``.

        The restricted variant (Cosmos DB) does not support server-side
        counting in all versions, so there the matching documents are
        fetched and counted.
        """
        handle = await self._provider.get_connection()
        if handle.is_restricted_variant:
            return len(await self.find(collection, filter or {}, **options))

        return await handle.db[collection].count_documents(filter or {}, **options)

    async def create_index(self, collection: str, keys: Any, **options) -> str:
        async def action(client, db):
            return await db[collection].create_index(keys, **options)

        return await self.with_client(action)

    async def delete_one(
        self, collection: str, filter: Mapping[str, Any], **options
    ) -> DeleteResult:
        async def action(client, db):
            return await db[collection].delete_one(filter, **options)

        return await self.with_client(action)

    async def delete_many(
        self, collection: str, filter: Mapping[str, Any], **options
    ) -> DeleteResult:
        async def action(client, db):
            return await db[collection].delete_many(filter, **options)

        return await self.with_client(action)

    async def find(
        self, collection: str, filter: Mapping[str, Any] | None = None, **options
    ) -> list[dict[str, Any]]:
        """Return all documents matching ``filter`` as a list."""
        async def action(client, db):
            cursor = db[collection].find(filter or {}, **options)
            return await cursor.to_list(length=None)

        return await self.with_client(action)

    async def find_one(
        self, collection: str, filter: Mapping[str, Any] | None = None, **options
    ) -> dict[str, Any] | None:
        async def action(client, db):
            return await db[collection].find_one(filter or {}, **options)

        return await self.with_client(action)

    async def insert_one(
        self, collection: str, document: Mapping[str, Any], **options
    ) -> InsertOneResult:
        async def action(client, db):
            return await db[collection].insert_one(document, **options)

        return await self.with_client(action)

    async def insert_many(
        self, collection: str, documents: Sequence[Mapping[str, Any]], **options
    ) -> InsertManyResult:
        async def action(client, db):
            return await db[collection].insert_many(documents, **options)

        return await self.with_client(action)

    async def update_one(
        self,
        collection: str,
        filter: Mapping[str, Any],
        update: Mapping[str, Any] | Sequence[Mapping[str, Any]],
        **options,
    ) -> UpdateResult:
        async def action(client, db):
            return await db[collection].update_one(filter, update, **options)

        return await self.with_client(action)

    async def update_many(
        self,
        collection: str,
        filter: Mapping[str, Any],
        update: Mapping[str, Any] | Sequence[Mapping[str, Any]],
        **options,
    ) -> UpdateResult:
        async def action(client, db):
            return await db[collection].update_many(filter, update, **options)

        return await self.with_client(action)
