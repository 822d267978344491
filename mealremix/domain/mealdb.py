import logging
from typing import Any

import httpx

from mealremix.domain.errors import EmptyResult, MalformedResponse, NetworkFailure
from mealremix.domain.models import Recipe


logger = logging.getLogger(__name__)


BASE_URL = "https://www.themealdb.com/api/json/v1/1/"
TIMEOUT = 20


def mealdb_client_factory(
    base_url: str = BASE_URL,
    timeout: float = TIMEOUT,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url, timeout=timeout)


class RecipeFetcher:
    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self.client = mealdb_client_factory() if client is None else client

    async def _meals(
        self,
        path: str,
        params: dict[str, str] | None = None,
    ) -> list[dict[str, Any]]:
        try:
            resp = await self.client.get(path, params=params)
        except httpx.HTTPError as e:
            raise NetworkFailure(f"Could not reach TheMealDB: {e!r}") from e

        if not resp.is_success:
            logger.error("MealDB error: %s %s", resp.status_code, path)
            raise NetworkFailure(
                f"TheMealDB returned {resp.status_code}",
                status=resp.status_code,
                body=resp.text,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise MalformedResponse(f"TheMealDB sent invalid JSON for {path}") from e

        meals = data.get("meals") if isinstance(data, dict) else None
        return meals if isinstance(meals, list) else []

    async def fetch_random(self) -> Recipe:
        meals = await self._meals("random.php")
        if not meals:
            raise EmptyResult()
        return Recipe.from_mealdb(meals[0])

    async def search_by_name(self, name: str) -> Recipe:
        if not name or not name.strip():
            raise ValueError("Provide a recipe name.")
        meals = await self._meals("search.php", {"s": name})
        if not meals:
            raise EmptyResult(name)
        return Recipe.from_mealdb(meals[0])

    async def close(self) -> None:
        await self.client.aclose()
