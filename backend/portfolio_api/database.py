"""
Portfolio API - Database Handle
===============================

What:  Owns the single MongoDB client used by every request handler.
How:   `Database` wraps an AsyncIOMotorClient. The application lifespan opens
       one instance at startup, stores it on `app.state.database` and closes
       it on shutdown. Route handlers receive it through `get_database`.
Who:   Used by services via FastAPI's dependency injection system.

Collections (fixed names inside the `portfolio` database):
    projects, skills, backendSkills, contacts, blogs

Connection pooling is left to the driver; the handle is shared by all
concurrent requests and holds no other state.
"""

import logging
from typing import Optional

from fastapi import Request
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from portfolio_api.config import settings

logger = logging.getLogger(__name__)


# ── Collection Names ──────────────────────────────────────────────────────
PROJECTS = "projects"
SKILLS = "skills"
BACKEND_SKILLS = "backendSkills"
CONTACTS = "contacts"
BLOGS = "blogs"

COLLECTIONS = (PROJECTS, SKILLS, BACKEND_SKILLS, CONTACTS, BLOGS)


class Database:
    """
    Long-lived handle to the portfolio database.

    Attributes:
        uri:   Connection string passed to the driver
        name:  Database name holding the collections
    """

    def __init__(self, uri: str, name: str, timeout_ms: int = 5000):
        self.uri = uri
        self.name = name
        self.timeout_ms = timeout_ms
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> None:
        """
        Create the client and confirm the deployment answers a ping.

        A failed ping is logged rather than raised: the driver connects
        lazily, so the server can start and report the outage through
        /health and per-request errors.
        """
        if self._client is not None:
            return
        self._client = AsyncIOMotorClient(
            self.uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            serverSelectionTimeoutMS=self.timeout_ms,
        )
        self._db = self._client[self.name]
        if await self.ping():
            logger.info("Connected to MongoDB database '%s'", self.name)
        else:
            logger.error("MongoDB ping failed; requests will fail until it is reachable")

    async def ping(self) -> bool:
        if self._db is None:
            return False
        try:
            await self._db.command("ping")
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
        return True

    def collection(self, name: str) -> AsyncIOMotorCollection:
        if self._db is None:
            raise RuntimeError("Database is not connected. Call connect() on startup.")
        return self._db[name]

    async def close(self) -> None:
        """Close all pooled connections. Safe to call more than once."""
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB client closed")
        self._client = None
        self._db = None


def create_database() -> Database:
    """Build the handle described by the current settings."""
    return Database(
        uri=settings.database_uri,
        name=settings.db_name,
        timeout_ms=settings.db_timeout_ms,
    )


# ── Dependency ────────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the handle opened by the lifespan.

    Example usage in a route:
        @router.get("/skills")
        async def list_skills(db: Database = Depends(get_database)):
            return await skill_service.list_all(db)
    """
    return request.app.state.database
