"""Tests for the primary → secondary LLM fallback chain."""
import json

import httpx
import pytest

from conceptcraft.ai.gateway import (
    AnthropicChatProvider,
    GenerationUnavailable,
    LLMGateway,
    OpenAIChatProvider,
    build_gateway,
)
from conceptcraft.core.config import LLMSettings

from fakes import FailingProvider, ScriptedProvider, make_gateway


@pytest.mark.asyncio
async def test_primary_answer_skips_secondary():
    primary = ScriptedProvider("primary", ["from primary"])
    secondary = ScriptedProvider("secondary", ["from secondary"])
    gateway = make_gateway(primary, secondary)

    assert await gateway.complete("hello") == "from primary"
    assert secondary.prompts == []


@pytest.mark.asyncio
async def test_falls_back_once_with_same_prompt():
    primary = FailingProvider("primary")
    secondary = ScriptedProvider("secondary", ["from secondary"])
    gateway = make_gateway(primary, secondary)

    assert await gateway.complete("explain signals") == "from secondary"
    assert primary.calls == 1
    assert secondary.prompts == ["explain signals"]


@pytest.mark.asyncio
async def test_both_failing_raises_generation_unavailable():
    primary = FailingProvider("primary")
    secondary = FailingProvider("secondary")
    gateway = make_gateway(primary, secondary)

    with pytest.raises(GenerationUnavailable) as exc_info:
        await gateway.complete("prompt")
    assert primary.calls == 1
    assert secondary.calls == 1
    assert [name for name, _ in exc_info.value.failures] == ["primary", "secondary"]


@pytest.mark.asyncio
async def test_empty_completion_counts_as_failure():
    gateway = make_gateway(ScriptedProvider("primary", ["   "]), ScriptedProvider("secondary", ["ok"]))
    assert await gateway.complete("prompt") == "ok"


@pytest.mark.asyncio
async def test_missing_providers_fail_immediately():
    gateway = make_gateway(None, None)
    assert not gateway.configured
    with pytest.raises(GenerationUnavailable):
        await gateway.complete("prompt")


def test_build_gateway_skips_providers_without_keys():
    gateway = build_gateway(LLMSettings(openai_api_key=None, anthropic_api_key=None))
    assert gateway.primary is None
    assert gateway.secondary is None


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", " sk-test ")
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.setenv("OPENAI_MODEL", "gpt-4o-mini")

    settings = LLMSettings.from_env()
    assert settings.openai_api_key == "sk-test"
    assert settings.anthropic_api_key is None
    assert settings.openai_model == "gpt-4o-mini"


@pytest.mark.asyncio
async def test_anthropic_provider_posts_messages_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"content": [{"type": "text", "text": "A metaphor."}]})

    settings = LLMSettings(anthropic_api_key="ak-test")
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    provider = AnthropicChatProvider(settings, http_client=client)

    assert await provider.complete("make a metaphor") == "A metaphor."
    assert seen["headers"]["x-api-key"] == "ak-test"
    assert seen["body"]["model"] == settings.anthropic_model
    assert seen["body"]["messages"] == [{"role": "user", "content": "make a metaphor"}]
    await provider.aclose()


@pytest.mark.asyncio
async def test_openai_error_status_triggers_anthropic_fallback():
    def openai_handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "bad key", "type": "invalid_request_error"}})

    def anthropic_handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"content": [{"type": "text", "text": "fallback text"}]})

    settings = LLMSettings(openai_api_key="sk-test", anthropic_api_key="ak-test")
    primary = OpenAIChatProvider(
        settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(openai_handler))
    )
    secondary = AnthropicChatProvider(
        settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(anthropic_handler))
    )
    gateway = LLMGateway(settings, primary=primary, secondary=secondary)

    assert await gateway.complete("prompt") == "fallback text"
    await gateway.aclose()


@pytest.mark.asyncio
async def test_openai_provider_reads_first_choice():
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body["messages"][0]["role"] == "system"
        assert body["max_tokens"] == 1000
        return httpx.Response(
            200,
            json={
                "id": "chatcmpl-1",
                "object": "chat.completion",
                "created": 0,
                "model": body["model"],
                "choices": [
                    {
                        "index": 0,
                        "message": {"role": "assistant", "content": "primary text"},
                        "finish_reason": "stop",
                    }
                ],
            },
        )

    settings = LLMSettings(openai_api_key="sk-test")
    provider = OpenAIChatProvider(settings, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    assert await provider.complete("prompt") == "primary text"
    await provider.aclose()
