from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DEPLOYMENT_NAME = "gpt-4o"
COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Chat completion (Azure OpenAI)
    # Authentication uses ambient credentials only; there is deliberately no API key setting.
    azure_ai_endpoint: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "AZUREAI__ENDPOINT",
            "AZURE_AI_ENDPOINT",
            "azure_ai_endpoint",
        ),
        description="Azure OpenAI resource endpoint. When unset the chat gateway is disabled.",
    )
    azure_ai_deployment_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "AZUREAI__DEPLOYMENTNAME",
            "AZURE_AI_DEPLOYMENT_NAME",
            "azure_ai_deployment_name",
        ),
        description=f"Deployment/model identifier (falls back to {DEFAULT_DEPLOYMENT_NAME}).",
    )
    azure_ai_api_version: str = Field(
        default="2024-10-21",
        validation_alias=AliasChoices(
            "AZUREAI__APIVERSION",
            "AZURE_AI_API_VERSION",
            "azure_ai_api_version",
        ),
        description="Azure OpenAI data-plane API version.",
    )
    azure_ai_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        validation_alias=AliasChoices("AZURE_AI_TIMEOUT_SECONDS", "azure_ai_timeout_seconds"),
        description="Timeout for chat completion requests (seconds).",
    )
    azure_ai_token_scope: str = Field(
        default=COGNITIVE_SERVICES_SCOPE,
        validation_alias=AliasChoices("AZURE_AI_TOKEN_SCOPE", "azure_ai_token_scope"),
        description="OAuth scope requested from the ambient credential.",
    )

    @property
    def resolved_endpoint(self) -> str | None:
        # Pasted values often carry surrounding whitespace or a trailing newline.
        endpoint = (self.azure_ai_endpoint or "").strip()
        return endpoint or None

    @property
    def chat_enabled(self) -> bool:
        return self.resolved_endpoint is not None

    @property
    def resolved_deployment_name(self) -> str:
        return self.azure_ai_deployment_name or DEFAULT_DEPLOYMENT_NAME


@lru_cache
def get_settings() -> Settings:
    return Settings()
