from pathlib import Path
from typing import Any, AsyncIterator

from databases import Database
import pytest
import pytest_asyncio

from mealremix.domain.models import Recipe
from mealremix.domain.saved import LocalStorage, SavedRecipes
from tests.fakes import meal_record


@pytest.fixture
def record() -> dict[str, Any]:
    return meal_record()


@pytest.fixture
def recipe(record: dict[str, Any]) -> Recipe:
    return Recipe.from_mealdb(record)


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'mealremix.db'}"


@pytest_asyncio.fixture
async def db(db_url: str) -> AsyncIterator[Database]:
    database = Database(db_url)
    await database.connect()
    yield database
    await database.disconnect()


@pytest_asyncio.fixture
async def storage(db: Database) -> LocalStorage:
    storage = LocalStorage(db)
    await storage.create()
    return storage


@pytest.fixture
def saved(storage: LocalStorage) -> SavedRecipes:
    return SavedRecipes(storage)
