from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient

from papersmith.storage.backend import PersistenceBackend


class MongoBackend(PersistenceBackend):
    """Keeps each collection as a single document in ``persisted_state``."""

    def __init__(self, mongo_uri: str, db_name: str) -> None:
        self.client = AsyncIOMotorClient(mongo_uri)
        self.db = self.client[db_name]
        self.state = self.db["persisted_state"]

    async def load(self, name: str) -> Optional[list[dict[str, Any]]]:
        doc = await self.state.find_one({"_id": name})
        if not doc:
            return None
        return list(doc.get("docs") or [])

    async def save(self, name: str, docs: list[dict[str, Any]]) -> None:
        await self.state.update_one(
            {"_id": name},
            {"$set": {"docs": docs, "updated_at": datetime.now(timezone.utc)}},
            upsert=True,
        )
