"""LLM provider client.

Every supported provider speaks the OpenAI chat-completions protocol
(Google through its OpenAI-compatible endpoint), so one request shape
covers them all.  Failures of any kind surface as ``AIProviderError``;
callers decide how to degrade.
"""

from __future__ import annotations

from typing import Any

import httpx

from statusboard.common.enums import LlmProvider
from statusboard.common.exceptions import AIProviderError
from statusboard.config import settings
from statusboard.core.analysis.schemas import ProviderConfig
from statusboard.integrations.base import BaseIntegration

PROVIDER_BASE_URLS: dict[LlmProvider, str] = {
    LlmProvider.OPENAI: "https://api.openai.com/v1",
    LlmProvider.DEEPSEEK: "https://api.deepseek.com/v1",
    LlmProvider.GOOGLE: "https://generativelanguage.googleapis.com/v1beta/openai",
}


def is_mock_key(api_key: str | None) -> bool:
    return not api_key or api_key.startswith("mock_")


def default_provider_config() -> ProviderConfig:
    """Provider settings from the environment, used when nothing is stored."""
    return ProviderConfig(
        provider=LlmProvider(settings.AI_PROVIDER),
        model=settings.AI_MODEL,
        api_key=settings.AI_API_KEY,
        base_url=settings.AI_BASE_URL or None,
    )


def _base_url(config: ProviderConfig) -> str:
    return (config.base_url or PROVIDER_BASE_URLS[config.provider]).rstrip("/")


class AIClient(BaseIntegration):
    """Chat-completions client for the configured LLM provider."""

    def __init__(self, timeout: float | None = None) -> None:
        super().__init__("ai")
        self._timeout = timeout or settings.AI_TIMEOUT_SECONDS

    async def health_check(self, config: ProviderConfig | None = None) -> bool:
        config = config or default_provider_config()
        if is_mock_key(config.api_key):
            self.logger.info("AI client health check: no API key configured")
            return False
        try:
            async with httpx.AsyncClient(timeout=10) as client:
                resp = await client.get(
                    f"{_base_url(config)}/models",
                    headers={"Authorization": f"Bearer {config.api_key}"},
                )
                return resp.status_code == 200
        except httpx.HTTPError as e:
            self.logger.error("AI health check failed: %s", e)
            return False

    async def complete(
        self,
        system: str,
        user: str,
        config: ProviderConfig,
        temperature: float | None = None,
    ) -> str:
        """Return the raw assistant text for one system/user exchange."""
        if is_mock_key(config.api_key):
            raise AIProviderError(f"{config.provider.value} API key is not configured")

        payload: dict[str, Any] = {
            "model": config.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": settings.AI_TEMPERATURE if temperature is None else temperature,
            "max_tokens": settings.AI_MAX_TOKENS,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(
                    f"{_base_url(config)}/chat/completions",
                    headers={
                        "Authorization": f"Bearer {config.api_key}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            raise AIProviderError(
                f"{config.provider.value} returned HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise AIProviderError(f"{config.provider.value} request failed: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise AIProviderError("Unexpected response shape from provider") from e
        if not content or not isinstance(content, str):
            raise AIProviderError(f"No response from {config.provider.value}")

        self.logger.debug("Completion received from %s (%d chars)", config.provider.value, len(content))
        return content
