from __future__ import annotations

from storefront.core.llm.azure_openai_client import AzureOpenAIChatClient, AzureOpenAIConfig
from storefront.core.llm.credentials import AzureBearerTokenProvider
from storefront.core.settings import Settings


def build_azure_openai_client(*, endpoint: str, settings: Settings) -> AzureOpenAIChatClient:
    """
    Build the production chat client for a configured endpoint.

    Uses DefaultAzureCredential (managed identity in Azure, developer login locally).
    Nothing here validates that the endpoint is reachable.
    """

    config = AzureOpenAIConfig(
        endpoint=endpoint,
        api_version=settings.azure_ai_api_version,
        timeout_seconds=float(settings.azure_ai_timeout_seconds),
    )
    token_provider = AzureBearerTokenProvider(scope=settings.azure_ai_token_scope)
    return AzureOpenAIChatClient(config=config, token_provider=token_provider)
