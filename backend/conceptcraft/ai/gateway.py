"""LLM gateway: one chat completion against the primary provider, one fallback call to the secondary.

There are no retries beyond the single fallback, no backoff and no caching.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import httpx
from openai import AsyncOpenAI

from conceptcraft.core.config import LLMSettings

logger = logging.getLogger(__name__)


class GenerationUnavailable(Exception):
    """Every configured provider failed for this prompt."""

    def __init__(self, failures: List[Tuple[str, str]]):
        self.failures = failures
        reasons = "; ".join(f"{name}: {reason}" for name, reason in failures) or "no providers"
        super().__init__(f"AI generation unavailable ({reasons})")


class ChatProvider(ABC):
    name: str = "provider"

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        ...

    async def aclose(self) -> None:
        return None


class OpenAIChatProvider(ChatProvider):
    name = "openai"

    def __init__(self, settings: LLMSettings, *, http_client: Optional[httpx.AsyncClient] = None) -> None:
        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY is not configured")
        self._settings = settings
        self._client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            timeout=settings.timeout_seconds,
            max_retries=0,
            http_client=http_client,
        )

    async def complete(self, prompt: str) -> str:
        response = await self._client.chat.completions.create(
            model=self._settings.openai_model,
            messages=[
                {"role": "system", "content": self._settings.system_prompt},
                {"role": "user", "content": prompt},
            ],
            max_tokens=self._settings.max_tokens,
            temperature=self._settings.temperature,
        )
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self._client.close()


class AnthropicChatProvider(ChatProvider):
    name = "anthropic"

    def __init__(self, settings: LLMSettings, *, http_client: Optional[httpx.AsyncClient] = None) -> None:
        if not settings.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY is not configured")
        self._settings = settings
        self._client = http_client or httpx.AsyncClient(timeout=settings.timeout_seconds)
        self._headers = {
            "x-api-key": settings.anthropic_api_key,
            "anthropic-version": settings.anthropic_version,
            "Content-Type": "application/json",
        }

    async def complete(self, prompt: str) -> str:
        payload: Dict[str, Any] = {
            "model": self._settings.anthropic_model,
            "max_tokens": self._settings.max_tokens,
            "system": self._settings.system_prompt,
            "messages": [{"role": "user", "content": prompt}],
        }
        r = await self._client.post(self._settings.anthropic_base_url, headers=self._headers, json=payload)
        r.raise_for_status()
        data = r.json()
        return "".join(
            block.get("text", "") for block in data.get("content", []) if block.get("type") == "text"
        )

    async def aclose(self) -> None:
        await self._client.aclose()


class LLMGateway:
    """
    ``complete(prompt)`` tries the primary provider, then the secondary once.
    A provider left as None (its key is missing) counts as an immediate failure.
    """

    def __init__(
        self,
        settings: LLMSettings,
        primary: Optional[ChatProvider] = None,
        secondary: Optional[ChatProvider] = None,
    ) -> None:
        self.settings = settings
        self.primary = primary
        self.secondary = secondary

    @property
    def configured(self) -> bool:
        return self.primary is not None or self.secondary is not None

    async def complete(self, prompt: str) -> str:
        failures: List[Tuple[str, str]] = []
        for slot, provider in (("primary", self.primary), ("secondary", self.secondary)):
            if provider is None:
                failures.append((slot, "not configured"))
                continue
            try:
                text = await provider.complete(prompt)
            except Exception as exc:
                logger.warning("LLM %s provider '%s' failed: %s", slot, provider.name, exc)
                failures.append((provider.name, str(exc) or type(exc).__name__))
                continue
            if text and text.strip():
                return text
            logger.warning("LLM %s provider '%s' returned an empty completion", slot, provider.name)
            failures.append((provider.name, "empty completion"))
        raise GenerationUnavailable(failures)

    async def aclose(self) -> None:
        for provider in (self.primary, self.secondary):
            if provider is not None:
                await provider.aclose()


def build_gateway(settings: LLMSettings) -> LLMGateway:
    primary = OpenAIChatProvider(settings) if settings.openai_api_key else None
    secondary = AnthropicChatProvider(settings) if settings.anthropic_api_key else None
    if primary is None and secondary is None:
        logger.warning("No LLM API keys configured; AI generation will use canned content only")
    return LLMGateway(settings, primary=primary, secondary=secondary)
