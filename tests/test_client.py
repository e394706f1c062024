"""Tests for the provider HTTP contracts."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable

import httpx
import pytest

from jira_rewriter.config import ProviderEndpoint, Settings
from jira_rewriter.models.client import (
    ClaudeProvider,
    OpenAIProvider,
    ProviderError,
    ProviderTimeoutError,
)
from jira_rewriter.models.routers import build_providers, resolve_provider_class

Handler = Callable[[httpx.Request], httpx.Response]


def _claude(handler: Handler, relay_url: str = "") -> ClaudeProvider:
    endpoint = ProviderEndpoint(url="https://api.anthropic.com/v1/messages", model="claude-test", max_tokens=1000)
    return ClaudeProvider(endpoint, relay_url=relay_url, transport=httpx.MockTransport(handler))


def _openai(handler: Handler, relay_url: str = "") -> OpenAIProvider:
    endpoint = ProviderEndpoint(url="https://api.openai.com/v1/chat/completions", model="gpt-test", max_tokens=1000)
    return OpenAIProvider(endpoint, relay_url=relay_url, transport=httpx.MockTransport(handler))


def test_claude_request_shape_and_extraction() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"content": [{"type": "text", "text": "*Done*"}]})

    text = asyncio.run(_claude(handler).rewrite("PROMPT", "sk-ant-1"))

    assert text == "*Done*"
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.anthropic.com/v1/messages"
    assert request.headers["x-api-key"] == "sk-ant-1"
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {
        "model": "claude-test",
        "max_tokens": 1000,
        "messages": [{"role": "user", "content": "PROMPT"}],
    }


def test_openai_request_shape_and_extraction() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": "* item"}}]})

    text = asyncio.run(_openai(handler).rewrite("PROMPT", "sk-2"))

    assert text == "* item"
    request = seen[0]
    assert request.headers["authorization"] == "Bearer sk-2"
    body = json.loads(request.content)
    assert body["model"] == "gpt-test"
    assert body["max_tokens"] == 1000
    assert body["messages"] == [{"role": "user", "content": "PROMPT"}]


def test_relay_wraps_encoded_provider_url() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"content": [{"text": "ok"}]})

    provider = _claude(handler, relay_url="https://relay.example/raw?url=")
    asyncio.run(provider.rewrite("PROMPT", "sk-ant-1"))

    assert provider.target_url == "https://relay.example/raw?url=https%3A%2F%2Fapi.anthropic.com%2Fv1%2Fmessages"
    assert seen[0].url.host == "relay.example"
    assert seen[0].url.params["url"] == "https://api.anthropic.com/v1/messages"


@pytest.mark.parametrize("factory", [_claude, _openai])
def test_error_status_raises_provider_error(factory: Callable[[Handler], object]) -> None:
    provider = factory(lambda request: httpx.Response(401, json={"error": "unauthorized"}))
    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(provider.rewrite("PROMPT", "bad"))
    assert excinfo.value.status == 401
    assert not excinfo.value.malformed
    assert str(excinfo.value) == f"{provider.display_name} API error: 401"


@pytest.mark.parametrize(
    "body",
    [
        {"content": []},
        {"content": [{"type": "text"}]},
        {"choices": [{"message": {"content": "wrong provider"}}]},
        {"content": [{"text": None}]},
    ],
)
def test_claude_missing_text_is_malformed(body: dict) -> None:
    provider = _claude(lambda request: httpx.Response(200, json=body))
    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(provider.rewrite("PROMPT", "sk-ant-1"))
    assert excinfo.value.malformed
    assert excinfo.value.status is None


def test_openai_missing_choices_is_malformed() -> None:
    provider = _openai(lambda request: httpx.Response(200, json={"choices": []}))
    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(provider.rewrite("PROMPT", "sk-2"))
    assert excinfo.value.malformed


def test_non_json_body_is_malformed() -> None:
    provider = _openai(lambda request: httpx.Response(200, text="<html>relay down</html>"))
    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(provider.rewrite("PROMPT", "sk-2"))
    assert excinfo.value.malformed


def test_timeout_raises_timeout_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(ProviderTimeoutError, match="Claude API request timed out after 120s"):
        asyncio.run(_claude(handler).rewrite("PROMPT", "sk-ant-1"))


def test_connect_error_propagates_unchanged() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(httpx.ConnectError):
        asyncio.run(_openai(handler).rewrite("PROMPT", "sk-2"))


def test_registry_builds_both_variants_from_settings() -> None:
    settings = Settings(RELAY_URL="", CLAUDE_MODEL="claude-x", OPENAI_MODEL="gpt-x")
    providers = build_providers(settings)
    assert isinstance(providers["claude"], ClaudeProvider)
    assert isinstance(providers["openai"], OpenAIProvider)
    assert providers["claude"].endpoint.model == "claude-x"
    assert providers["openai"].target_url == "https://api.openai.com/v1/chat/completions"


def test_unknown_provider_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown provider"):
        resolve_provider_class("gemini")  # type: ignore[arg-type]
