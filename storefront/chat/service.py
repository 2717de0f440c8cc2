from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from storefront.chat.prompt import build_chat_messages
from storefront.chat.schemas import ChatMessage, ChatResult
from storefront.core.llm.deps import build_azure_openai_client
from storefront.core.metrics import chat_requests_total
from storefront.core.settings import Settings

NOT_CONFIGURED_MESSAGE = (
    "Chat service is not configured. Please set the AzureAI:Endpoint configuration."
)
GENERIC_ERROR_MESSAGE = "An error occurred while processing your request. Please try again."


class ChatCompletionClient(Protocol):
    async def complete_chat(self, *, deployment: str, messages: Sequence[ChatMessage]) -> str: ...


ChatClientFactory = Callable[..., ChatCompletionClient]


@dataclass(frozen=True)
class Disabled:
    """No endpoint configured; every call short-circuits."""


@dataclass(frozen=True)
class Ready:
    client: ChatCompletionClient


GatewayState = Disabled | Ready


class ChatGateway:
    """
    Forward a customer message to the chat-completion provider.

    The state (Disabled or Ready) is decided once at construction and never changes.
    Calls share no mutable state, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        logger: logging.Logger,
        client_factory: ChatClientFactory = build_azure_openai_client,
    ):
        self._settings = settings
        self._logger = logger

        endpoint = settings.resolved_endpoint
        if endpoint is not None:
            self._state: GatewayState = Ready(
                client=client_factory(endpoint=endpoint, settings=settings)
            )
        else:
            self._state = Disabled()
            self._logger.warning(
                "AzureAI:Endpoint is not configured. Chat functionality will be limited."
            )

    @property
    def state(self) -> GatewayState:
        return self._state

    async def get_response(self, user_message: str) -> ChatResult:
        state = self._state
        if isinstance(state, Disabled):
            chat_requests_total.labels(outcome="not_configured").inc()
            return ChatResult.failed(NOT_CONFIGURED_MESSAGE)

        deployment = self._settings.resolved_deployment_name
        self._logger.info("Processing chat request", extra={"deployment": deployment})

        try:
            completion = await state.client.complete_chat(
                deployment=deployment,
                messages=build_chat_messages(user_message=user_message),
            )
        except Exception:  # noqa: BLE001 - every upstream failure maps to one generic result
            self._logger.exception(
                "Error processing chat request",
                extra={"deployment": deployment, "success": False},
            )
            chat_requests_total.labels(outcome="upstream_error").inc()
            return ChatResult.failed(GENERIC_ERROR_MESSAGE)

        self._logger.info(
            "Chat response generated successfully",
            extra={"deployment": deployment, "success": True},
        )
        chat_requests_total.labels(outcome="success").inc()
        return ChatResult.ok(completion)
