"""
MongoDB Connection Provider

Produces a working MongoDB connection on demand:

    MongoConnectionProvider.get_connection()
        ├── no handle            -> reconnect
        ├── handle, probe ok     -> same handle
        └── handle, probe fails  -> reconnect once, propagate on failure

Reconnect:
    1. Close and discard the previous handle (close errors are logged only)
    2. Fetch fresh options from the caller-supplied accessor
    3. Validate URL and database name (ConfigError)
    4. Create the Motor client and ping until it answers
    5. Store and return the new handle

Any failure in 2-4 resets the provider to "no handle" and propagates; there
is no retry loop inside a single call. Reconnects are serialized with an
asyncio.Lock, so concurrent callers wait for the one in flight instead of
opening their own connections.

The provider is an explicit object owned by application startup code, not a
module-level singleton:

    provider = MongoConnectionProvider(lambda: mongo_options_from_settings(settings))
    handle = await provider.get_connection()
    await handle.db["orders"].insert_one({"orderId": 42})
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError as MongoConfigurationError
from pymongo.errors import PyMongoError

from microkit.core.config.settings import Settings
from microkit.core.exceptions import ConfigError, DatabaseConnectionError
from microkit.core.logging import get_logger, mask_url

logger = get_logger(__name__)

# Time the driver may spend finding a usable server before failing
SERVER_SELECTION_TIMEOUT_MS = 5000


@dataclass(frozen=True)
class MongoClientOptions:
    """
    Connection options returned by the provider's accessor.

    Attributes:
        url: MongoDB connection URL
        database: Name of the database to select
        is_restricted_variant: Backend has a restricted feature set
            (Cosmos DB: no server-side count)
        tls: Use TLS (None leaves the driver/URL default)
        tls_insecure: Relax TLS certificate and hostname checks
    """

    url: str | None
    database: str | None
    is_restricted_variant: bool = False
    tls: bool | None = None
    tls_insecure: bool | None = None


@dataclass(frozen=True)
class ConnectionHandle:
    """
    An established and verified connection to the document store.

    Callers keep their own reference for the duration of a call; the
    provider only closes a handle when replacing it.
    """

    url: str
    database: str
    is_restricted_variant: bool
    client: Any

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """The selected database."""
        return self.client[self.database]


OptionsAccessor = Callable[[], MongoClientOptions | Awaitable[MongoClientOptions]]


def mongo_options_from_settings(settings: Settings) -> MongoClientOptions:
    """Build MongoClientOptions from the MONGO_* settings."""
    mongo = settings.mongo
    return MongoClientOptions(
        url=mongo.MONGO_URL,
        database=mongo.MONGO_DB,
        is_restricted_variant=mongo.MONGO_IS_COSMOSDB,
        tls=mongo.MONGO_TLS,
        tls_insecure=mongo.MONGO_TLS_INSECURE,
    )


class MongoConnectionProvider:
    """
    Reconnect-aware provider of a single MongoDB connection.

    Attributes:
        _get_client_options: Accessor invoked on every reconnect, so URLs and
            credentials may rotate between attempts
        _client_factory: Creates the driver client (AsyncIOMotorClient)
        _handle: Current verified handle, or None
        _lock: Serializes get_connection()/close()
    """

    def __init__(
        self,
        get_client_options: OptionsAccessor,
        client_factory: Callable[..., Any] = AsyncIOMotorClient,
        server_selection_timeout_ms: int = SERVER_SELECTION_TIMEOUT_MS,
    ) -> None:
        self._get_client_options = get_client_options
        self._client_factory = client_factory
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._handle: ConnectionHandle | None = None
        self._lock = asyncio.Lock()

    @property
    def handle(self) -> ConnectionHandle | None:
        """The current handle without probing it (None if disconnected)."""
        return self._handle

    async def get_connection(self) -> ConnectionHandle:
        """
        Return a verified connection handle.

        Returns:
            ConnectionHandle: The existing handle if its liveness probe
            succeeds, otherwise a freshly opened one.

        Raises:
            ConfigError: URL or database name missing/invalid
            DatabaseConnectionError: The driver could not connect
        """
        async with self._lock:
            handle = self._handle
            if handle is None:
                return await self._reopen()

            try:
                await self._probe(handle)
            except Exception as e:
                logger.warning(
                    "MongoDB liveness probe failed, reconnecting",
                    stage="MONGO.PROBE",
                    database=handle.database,
                    error=str(e),
                )
                return await self._reopen()

            return handle

    async def close(self) -> None:
        """Close and discard the current handle. Safe to call when disconnected."""
        async with self._lock:
            await self._reset()

    async def _probe(self, handle: ConnectionHandle) -> None:
        await handle.db.list_collection_names()

    async def _reopen(self) -> ConnectionHandle:
        await self._reset()

        try:
            options = self._get_client_options()
            if inspect.isawaitable(options):
                options = await options

            url = (options.url or "").strip()
            if not url:
                raise ConfigError("No Mongo url defined").with_suggestion("Set MONGO_URL")

            database = (options.database or "").strip()
            if not database:
                raise ConfigError("No Mongo database defined").with_suggestion("Set MONGO_DB")

            logger.info(
                "Connecting to MongoDB",
                stage="MONGO.CONNECT",
                url=mask_url(url),
                database=database,
            )

            client = self._create_client(url, options)
            try:
                await client.admin.command("ping")
            except BaseException:
                await _close_client(client)
                raise

            handle = ConnectionHandle(
                url=url,
                database=database,
                is_restricted_variant=bool(options.is_restricted_variant),
                client=client,
            )
        except PyMongoError as e:
            logger.error("MongoDB connection failed", stage="MONGO.CONNECT", error=str(e))
            raise DatabaseConnectionError.from_exception(
                e, message=f"Failed to connect to MongoDB: {e}"
            ) from e

        # Only a verified handle is ever stored
        self._handle = handle
        logger.info("MongoDB connected", stage="MONGO.CONNECT", database=database)
        return handle

    def _create_client(self, url: str, options: MongoClientOptions) -> Any:
        kwargs: dict[str, Any] = {
            "serverSelectionTimeoutMS": self._server_selection_timeout_ms,
        }
        if options.tls is not None:
            kwargs["tls"] = options.tls
        if options.tls_insecure is not None:
            kwargs["tlsInsecure"] = options.tls_insecure

        try:
            return self._client_factory(url, **kwargs)
        except MongoConfigurationError as e:
            raise ConfigError.from_exception(e, message=f"Invalid Mongo configuration: {e}") from e

    async def _reset(self) -> None:
        handle = self._handle
        self._handle = None

        if handle is not None:
            await _close_client(handle.client)
            logger.debug("MongoDB connection closed", stage="MONGO.CLOSE", database=handle.database)


async def _close_client(client: Any) -> None:
    """Close a driver client, logging and discarding any error."""
    try:
        result = client.close()
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.warning("Error closing MongoDB client", stage="MONGO.CLOSE", error=str(e))
