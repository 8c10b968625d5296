"""
MongoDB persistence connector.

Establishes two independent handles to the same logical database:
- ``mapped``: backs the document-mapping layer (agents, users, analytics)
- ``raw``: plain driver access used by task operations

Both are created and pinged once during application startup; the app does
not serve traffic until both succeed. After ``connect()`` the handles are
never reassigned.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from backend.src.config import Settings
from backend.src.errors import DatabaseConnectionError
from backend.src.repositories.agent_repo import AgentRepository
from backend.src.repositories.user_repo import UserRepository

logger = structlog.get_logger(__name__)

MAPPED = "mapped"
RAW = "raw"

# Collections on the mapped handle whose unique fields are enforced by index
INDEXED_REPOSITORIES = (AgentRepository, UserRepository)


@dataclass
class HandleState:
    """Readiness and last failure of one database handle."""

    ready: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"ready": self.ready, "error": self.error}


class MongoConnector:
    """Owns the mapped and raw MongoDB handles for the application lifetime."""

    def __init__(self, settings: Settings):
        """
        Initialize connector.

        Args:
            settings: Application settings (connection string, timeouts)
        """
        self.settings = settings
        self._clients: Dict[str, AsyncMongoClient] = {}
        self._databases: Dict[str, AsyncDatabase] = {}
        self.states: Dict[str, HandleState] = {
            MAPPED: HandleState(),
            RAW: HandleState(),
        }

    def _create_client(self) -> AsyncMongoClient:
        return AsyncMongoClient(
            self.settings.mongo_uri,
            serverSelectionTimeoutMS=self.settings.mongo_server_selection_timeout_ms,
            tz_aware=True,
        )

    async def _open(self, handle: str) -> None:
        state = self.states[handle]
        try:
            client = self._create_client()
            self._clients[handle] = client
            await client.admin.command("ping")
            database = client.get_default_database(default=self.settings.database_name)
        except Exception as e:
            state.ready = False
            state.error = str(e)
            logger.error("database_connection_failed", handle=handle, error=str(e))
            raise DatabaseConnectionError(handle, str(e)) from e

        self._databases[handle] = database
        state.ready = True
        state.error = None
        logger.info("database_connected", handle=handle, database=database.name)

    async def _ensure_indexes(self) -> None:
        database = self._databases[MAPPED]
        try:
            for repository in INDEXED_REPOSITORIES:
                await database[repository.collection_name].create_indexes(repository.indexes)
        except Exception as e:
            self.states[MAPPED].ready = False
            self.states[MAPPED].error = str(e)
            logger.error("database_index_creation_failed", handle=MAPPED, error=str(e))
            raise DatabaseConnectionError(MAPPED, str(e)) from e
        logger.info("database_indexes_ensured", collections=[r.collection_name for r in INDEXED_REPOSITORIES])

    async def connect(self) -> None:
        """
        Open and verify both handles, mapped first, then create the unique
        indexes on the mapped handle.

        Raises:
            DatabaseConnectionError: If either handle cannot reach the server
                or the unique indexes cannot be created.
                Any handle already opened is closed before raising.
        """
        try:
            await self._open(MAPPED)
            await self._open(RAW)
            await self._ensure_indexes()
        except DatabaseConnectionError:
            await self.close()
            raise

    async def close(self) -> None:
        """Close every open client. Safe to call more than once."""
        for handle, client in list(self._clients.items()):
            await client.close()
            self.states[handle].ready = False
            logger.info("database_handle_closed", handle=handle)
        self._clients.clear()
        self._databases.clear()

    def _database(self, handle: str) -> AsyncDatabase:
        database = self._databases.get(handle)
        if database is None:
            raise RuntimeError(
                f"The {handle} database handle is not connected. "
                "Call connect() during startup."
            )
        return database

    @property
    def mapped_db(self) -> AsyncDatabase:
        """Database handle for the document-mapping layer."""
        return self._database(MAPPED)

    @property
    def raw_db(self) -> AsyncDatabase:
        """Database handle for direct driver access (tasks)."""
        return self._database(RAW)

    @property
    def is_ready(self) -> bool:
        return all(state.ready for state in self.states.values())

    def status(self) -> Dict[str, Dict[str, Any]]:
        """Readiness of each handle, keyed by handle name."""
        return {name: state.to_dict() for name, state in self.states.items()}
