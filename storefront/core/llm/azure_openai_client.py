from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import httpx

from storefront.chat.schemas import ChatMessage
from storefront.core.llm.credentials import BearerTokenProvider


class ChatCompletionError(Exception):
    """Base error for chat completion failures (never shown to customers)."""


class ChatUpstreamError(ChatCompletionError):
    """Raised when the completion API fails or returns an unexpected response."""


class EmptyCompletionError(ChatUpstreamError):
    """Raised when the completion API answers without any usable content."""


@dataclass(frozen=True)
class AzureOpenAIConfig:
    endpoint: str
    api_version: str
    timeout_seconds: float


def _extract_first_text(data: Any) -> str:
    try:
        choices = data["choices"]
    except (KeyError, TypeError) as exc:
        raise ChatUpstreamError("LLM response had no choices field") from exc
    if not isinstance(choices, list) or not choices:
        raise EmptyCompletionError("LLM response contained no choices")

    try:
        content = choices[0]["message"]["content"]
    except (KeyError, TypeError) as exc:
        raise ChatUpstreamError("LLM response choice had no message") from exc

    if isinstance(content, str):
        return content
    # Some API versions return a list of content parts; only the first one is used.
    if isinstance(content, list) and content:
        first = content[0]
        text = first.get("text") if isinstance(first, dict) else None
        if isinstance(text, str):
            return text
        raise ChatUpstreamError("LLM response content part had no text")
    raise EmptyCompletionError("LLM response message had no content")


class AzureOpenAIChatClient:
    """
    Minimal Azure OpenAI chat-completions client.

    Design notes:
    - No logging in this module (messages/completions may contain personal data).
    - One request per call, no retries; the transport timeout is the only limit.
    - Bound to an endpoint and credential; the deployment is chosen per call.
    """

    def __init__(
        self,
        *,
        config: AzureOpenAIConfig,
        token_provider: BearerTokenProvider,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._token_provider = token_provider
        self._transport = transport

    def _completions_url(self, deployment: str) -> str:
        base = self._config.endpoint.rstrip("/")
        return f"{base}/openai/deployments/{deployment}/chat/completions"

    async def complete_chat(self, *, deployment: str, messages: Sequence[ChatMessage]) -> str:
        try:
            token = await self._token_provider()
        except Exception as exc:  # noqa: BLE001
            raise ChatUpstreamError("Could not acquire an access token") from exc

        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "messages": [m.model_dump() for m in messages],
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(
                    self._completions_url(deployment),
                    params={"api-version": self._config.api_version},
                    headers=headers,
                    json=payload,
                )
        except httpx.TimeoutException as exc:
            raise ChatUpstreamError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise ChatUpstreamError("LLM request failed") from exc
        except httpx.InvalidURL as exc:
            raise ChatUpstreamError("LLM endpoint URL is invalid") from exc

        if resp.status_code != 200:
            raise ChatUpstreamError(f"LLM service returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise ChatUpstreamError("LLM response was not valid JSON") from exc

        return _extract_first_text(data)
