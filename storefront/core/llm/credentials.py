from __future__ import annotations

from typing import Protocol

from azure.core.credentials_async import AsyncTokenCredential
from azure.identity.aio import DefaultAzureCredential

from storefront.core.settings import COGNITIVE_SERVICES_SCOPE


class BearerTokenProvider(Protocol):
    async def __call__(self) -> str: ...


class AzureBearerTokenProvider:
    """
    Produce bearer tokens from an Azure token credential.

    The credential (managed identity, workload identity, az login, ...) is resolved
    lazily by azure-identity on the first token request and caches tokens itself,
    so building this object never touches the network.
    """

    def __init__(
        self,
        *,
        credential: AsyncTokenCredential | None = None,
        scope: str = COGNITIVE_SERVICES_SCOPE,
    ):
        self._credential = credential or DefaultAzureCredential()
        self._scope = scope

    async def __call__(self) -> str:
        access_token = await self._credential.get_token(self._scope)
        return access_token.token
