from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from storefront.chat.deps import get_chat_gateway
from storefront.chat.schemas import ChatRequest, ChatResult
from storefront.chat.service import ChatGateway
from storefront.core.middleware.http_logging import REQUEST_ID_HEADER

router = APIRouter(prefix="/chat", tags=["chat"])
logger = logging.getLogger("storefront.chat.api")


@router.post(
    "",
    response_model=ChatResult,
    summary="Ask the storefront assistant",
    description=(
        "Forward a customer message to the assistant and return its reply.\n\n"
        "Failures are reported in the body (`success=false` with a customer-safe `error`) "
        "with HTTP 200; upstream details are only written to server logs."
    ),
)
async def post_chat(
    payload: ChatRequest,
    request: Request,
    gateway: ChatGateway = Depends(get_chat_gateway),
) -> ChatResult:
    request_id = getattr(request.state, "request_id", None) or request.headers.get(
        REQUEST_ID_HEADER
    )

    result = await gateway.get_response(payload.message)

    # Outcome only; the message and reply are never logged.
    logger.info(
        "Chat request handled",
        extra={"request_id": request_id, "success": result.success},
    )
    return result
