import logging
import os
from typing import Any

import httpx
from openai.types.chat import (
    ChatCompletionMessageParam,
    ChatCompletionSystemMessageParam,
    ChatCompletionUserMessageParam,
)

from mealremix.domain.errors import NetworkFailure
from mealremix.domain.models import RemixRequest
from mealremix.domain.prompts import REMIX_SYSTEM_PROMPT, remix_user_prompt


logger = logging.getLogger(__name__)


BASE_URL = "https://api.openai.com/v1/"
TIMEOUT = 60 * 2
DEFAULT_MODEL = "gpt-4.1"
TEMPERATURE = 0.8
MAX_TOKENS = 400
NO_RESPONSE = "No response from AI."


def openai_client_factory(
    token: str | None = None,
    *,
    base_url: str = BASE_URL,
    timeout: float = TIMEOUT,
) -> httpx.AsyncClient:
    token = os.environ.get("OPENAI_API_KEY") if token is None else token
    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    else:
        logger.warning("No OpenAI API key configured, remixes will fail.")
    return httpx.AsyncClient(
        base_url=base_url,
        headers=headers,
        timeout=timeout,
    )


def completion_text(data: Any) -> str:
    """Text of the first choice, or a placeholder when the shape is off."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None
    if not isinstance(content, str) or not content:
        logger.warning("Unexpected completion shape: %r", data)
        return NO_RESPONSE
    return content


class LLMService:
    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        *,
        model: str = DEFAULT_MODEL,
        temperature: float = TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ) -> None:
        self.http_client = (
            openai_client_factory() if http_client is None else http_client
        )
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def messages(self, request: RemixRequest) -> list[ChatCompletionMessageParam]:
        system_message: ChatCompletionSystemMessageParam = {
            "role": "system",
            "content": REMIX_SYSTEM_PROMPT,
        }
        user_message: ChatCompletionUserMessageParam = {
            "role": "user",
            "content": remix_user_prompt(request),
        }
        return [system_message, user_message]

    def payload(self, request: RemixRequest) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": self.messages(request),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    async def remix(self, request: RemixRequest) -> str:
        resp = await self.http_client.post(
            "chat/completions", json=self.payload(request)
        )
        if not resp.is_success:
            raise NetworkFailure(
                "Problem creating completion.",
                status=resp.status_code,
                body=resp.text,
            )
        return completion_text(resp.json())

    async def close(self) -> None:
        await self.http_client.aclose()
