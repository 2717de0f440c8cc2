from __future__ import annotations

import logging
from functools import lru_cache

from storefront.chat.service import ChatGateway
from storefront.core.settings import get_settings


@lru_cache
def get_chat_gateway() -> ChatGateway:
    """
    Dependency provider for the process-wide ChatGateway.

    Built on first use and then reused; a missing endpoint yields a disabled gateway
    rather than an error during dependency resolution.
    """

    return ChatGateway(settings=get_settings(), logger=logging.getLogger("storefront.chat"))
