"""MongoDB connection and collection provisioning.

Why: Adapter kapselt pymongo; stores only receive ready collection handles.
"""

from dataclasses import dataclass
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from profrate.domain.errors import StoreError


@dataclass
class MongoConfig:
    """Configuration for the MongoDB client connection."""

    url: str = "mongodb://localhost:27017"
    database: str = "profrate"
    professors_collection: str = "professors"
    users_collection: str = "users"
    timeout_ms: int = 5000


class MongoConnection:
    """Owns one AsyncMongoClient and hands out collection handles.

    The client connects lazily, so construction does no network I/O.
    """

    def __init__(self, cfg: MongoConfig, client: Any | None = None) -> None:
        self._cfg = cfg
        self._client = client if client is not None else self._init_client(cfg)

    def _init_client(self, cfg: MongoConfig) -> Any:
        try:
            return AsyncMongoClient(cfg.url, serverSelectionTimeoutMS=cfg.timeout_ms)
        except (PyMongoError, ValueError) as ex:
            raise StoreError(f"Mongo init failed: {ex}") from ex

    @property
    def database(self) -> Any:
        return self._client[self._cfg.database]

    def professors(self) -> Any:
        return self.database[self._cfg.professors_collection]

    def users(self) -> Any:
        return self.database[self._cfg.users_collection]

    async def close(self) -> None:
        await self._client.close()
