"""Saved recipe names, kept under one key of a durable key/value store."""

import json
import logging
import sqlite3

from databases import Database

from mealremix.domain.errors import StorageFailure


logger = logging.getLogger(__name__)


SAVED_RECIPES_KEY = "savedRecipes"


CREATE_STORAGE_TABLE = """
CREATE TABLE IF NOT EXISTS LocalStorage (
    storage_key VARCHAR(256) PRIMARY KEY,
    storage_value TEXT NOT NULL
)
"""


GET_ITEM = "SELECT storage_value FROM LocalStorage WHERE storage_key = :key"


SET_ITEM = """
INSERT INTO LocalStorage(storage_key, storage_value) VALUES (:key, :value)
ON CONFLICT(storage_key) DO UPDATE SET storage_value = excluded.storage_value
"""


class LocalStorage:
    """String keys to string values in one table. Each write is a single upsert."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def create(self) -> None:
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            query=CREATE_STORAGE_TABLE
        )

    async def get_item(self, key: str) -> str | None:
        try:
            result = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
                GET_ITEM, values={"key": key}
            )
        except sqlite3.Error as e:
            raise StorageFailure(f"Could not read {key}") from e
        return None if result is None else result["storage_value"]

    async def set_item(self, key: str, value: str) -> None:
        try:
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                SET_ITEM, values={"key": key, "value": value}
            )
        except sqlite3.Error as e:
            raise StorageFailure(f"Could not write {key}") from e


class SavedRecipes:
    def __init__(self, storage: LocalStorage, *, key: str = SAVED_RECIPES_KEY) -> None:
        self.storage = storage
        self.key = key

    async def _persist(self, names: list[str]) -> bool:
        try:
            await self.storage.set_item(self.key, json.dumps(names))
        except StorageFailure:
            logger.exception("Failed to write %s to storage", self.key)
            return False
        return True

    async def add(self, name: str) -> bool:
        """Append `name` unless it is blank or already saved."""
        if not name or not name.strip():
            return False
        names = await self.list()
        if name in names:
            return False
        names.append(name)
        return await self._persist(names)

    async def remove(self, name: str) -> None:
        await self._persist([n for n in await self.list() if n != name])

    # Last, so annotations above still see the builtin `list`.
    async def list(self) -> list[str]:
        try:
            value = await self.storage.get_item(self.key)
            names = json.loads(value) if value else []
        except (StorageFailure, ValueError):
            logger.exception("Failed to read %s from storage", self.key)
            return []
        if not isinstance(names, list):
            logger.error("Ignoring %s: expected a list, got %r", self.key, names)
            return []
        return [n for n in names if isinstance(n, str)]
