from __future__ import annotations

import pytest

# Imported eagerly: create_app's module configures logging at import time, which must happen
# before caplog installs its handlers.
from storefront.main import create_app

_CHAT_ENV_VARS = (
    "AZUREAI__ENDPOINT",
    "AZURE_AI_ENDPOINT",
    "AZUREAI__DEPLOYMENTNAME",
    "AZURE_AI_DEPLOYMENT_NAME",
    "AZUREAI__APIVERSION",
    "AZURE_AI_API_VERSION",
    "AZURE_AI_TIMEOUT_SECONDS",
    "AZURE_AI_TOKEN_SCOPE",
)


@pytest.fixture(autouse=True)
def _isolate_chat_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    # Run from an empty directory so a developer's .env never leaks into tests.
    monkeypatch.chdir(tmp_path)
    for name in _CHAT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    # Settings and the gateway are cached via @lru_cache; clear so each test sees its own env.
    from storefront.chat.deps import get_chat_gateway
    from storefront.core.settings import get_settings

    get_settings.cache_clear()
    get_chat_gateway.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    app = create_app()
    with TestClient(app) as c:
        yield c
