import json

import httpx
import pytest

from mealremix.domain.errors import NetworkFailure
from mealremix.domain.llm_service import (
    NO_RESPONSE,
    completion_text,
    openai_client_factory,
)
from mealremix.domain.models import Recipe, RemixRequest, Theme
from tests.fakes import completion, llm_service


@pytest.mark.asyncio
async def test_remix_request_body(recipe: Recipe) -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=completion("Remixed Recipe\n..."))

    text = await llm_service(handler).remix(RemixRequest(recipe, Theme.VEGAN_REMIX))
    assert text == "Remixed Recipe\n..."

    request = requests[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-token"

    body = json.loads(request.content)
    assert body["model"] == "gpt-4.1"
    assert body["temperature"] == 0.8
    assert body["max_tokens"] == 400
    assert [m["role"] for m in body["messages"]] == ["system", "user"]
    assert "creative chef assistant" in body["messages"][0]["content"]
    assert "Remix theme: Vegan Remix" in body["messages"][1]["content"]
    assert recipe.to_json() in body["messages"][1]["content"]


@pytest.mark.asyncio
async def test_remix_http_error(recipe: Recipe) -> None:
    llm = llm_service(lambda request: httpx.Response(429, text="rate limited"))
    with pytest.raises(NetworkFailure) as exc_info:
        await llm.remix(RemixRequest(recipe))
    assert exc_info.value.status == 429
    assert exc_info.value.body == "rate limited"


@pytest.mark.parametrize(
    "data",
    (
        {},
        {"choices": []},
        {"choices": [{"message": {}}]},
        {"choices": [{"message": {"content": None}}]},
        {"choices": [{"message": {"content": ""}}]},
        [],
        None,
    ),
)
def test_completion_text_fallback(data: object) -> None:
    assert completion_text(data) == NO_RESPONSE


def test_completion_text() -> None:
    assert completion_text(completion("Spicy tacos")) == "Spicy tacos"


@pytest.mark.asyncio
async def test_client_without_token_sends_no_authorization(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    client = openai_client_factory()
    assert "Authorization" not in client.headers
    await client.aclose()


@pytest.mark.asyncio
async def test_client_with_token() -> None:
    client = openai_client_factory("sk-test")
    assert client.headers["Authorization"] == "Bearer sk-test"
    await client.aclose()
