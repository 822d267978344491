import httpx
import pytest

from mealremix.domain.errors import EmptyResult, MalformedResponse, NetworkFailure
from tests.fakes import meal_record, mealdb_fetcher


@pytest.mark.asyncio
async def test_fetch_random() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200, json={"meals": [meal_record(), meal_record(strMeal="Other")]}
        )

    recipe = await mealdb_fetcher(handler).fetch_random()
    assert recipe.name == "Teriyaki Chicken Casserole"
    assert requests[0].url.path == "/api/json/v1/1/random.php"


@pytest.mark.parametrize(
    "response",
    (
        httpx.Response(200, json={"meals": None}),
        httpx.Response(200, json={"meals": []}),
        httpx.Response(200, json={}),
    ),
)
@pytest.mark.asyncio
async def test_fetch_random_without_meals(response: httpx.Response) -> None:
    with pytest.raises(EmptyResult):
        await mealdb_fetcher(lambda request: response).fetch_random()


@pytest.mark.asyncio
async def test_fetch_random_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(NetworkFailure) as exc_info:
        await mealdb_fetcher(handler).fetch_random()
    assert exc_info.value.status is None


@pytest.mark.asyncio
async def test_fetch_random_invalid_json() -> None:
    fetcher = mealdb_fetcher(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(MalformedResponse):
        await fetcher.fetch_random()


@pytest.mark.asyncio
async def test_search_by_name_encodes_name() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200, json={"meals": [meal_record(strMeal="Fish & Chips")]}
        )

    recipe = await mealdb_fetcher(handler).search_by_name("Fish & Chips")
    assert recipe.name == "Fish & Chips"
    assert requests[0].url.path.endswith("/search.php")
    assert requests[0].url.params["s"] == "Fish & Chips"


@pytest.mark.asyncio
async def test_search_by_name_not_found() -> None:
    fetcher = mealdb_fetcher(lambda request: httpx.Response(200, json={"meals": None}))
    with pytest.raises(EmptyResult) as exc_info:
        await fetcher.search_by_name("Zzzzz")
    assert exc_info.value.name == "Zzzzz"
    assert "Zzzzz" in str(exc_info.value)


@pytest.mark.asyncio
async def test_search_by_name_http_error() -> None:
    fetcher = mealdb_fetcher(lambda request: httpx.Response(503, text="down"))
    with pytest.raises(NetworkFailure) as exc_info:
        await fetcher.search_by_name("Tacos")
    assert exc_info.value.status == 503
    assert exc_info.value.body == "down"


@pytest.mark.parametrize("name", ("", "   "))
@pytest.mark.asyncio
async def test_search_by_name_blank(name: str) -> None:
    fetcher = mealdb_fetcher(lambda request: httpx.Response(200, json={"meals": []}))
    with pytest.raises(ValueError):
        await fetcher.search_by_name(name)

