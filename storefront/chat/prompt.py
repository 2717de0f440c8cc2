from __future__ import annotations

from storefront.chat.schemas import ChatMessage

SYSTEM_PROMPT = (
    "You are a helpful assistant for Zava Storefront. "
    "Help customers with product questions and shopping assistance."
)


def build_chat_messages(*, user_message: str) -> list[ChatMessage]:
    """
    Create the (system, user) turns for a completion request.

    The customer message is passed through untouched: no trimming, escaping or truncation.
    """

    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=user_message),
    ]
