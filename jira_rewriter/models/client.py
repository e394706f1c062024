"""Provider clients for the Claude and OpenAI rewrite backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import httpx

from jira_rewriter.config import ProviderEndpoint
from jira_rewriter.types import Provider


class ProviderError(RuntimeError):
    """Raised when a provider call fails with a known failure shape."""

    def __init__(
        self,
        provider: str,
        *,
        status: int | None = None,
        malformed: bool = False,
        message: str | None = None,
    ) -> None:
        self.provider = provider
        self.status = status
        self.malformed = malformed
        if message is None:
            if status is not None:
                message = f"{provider} API error: {status}"
            elif malformed:
                message = f"{provider} API returned an unexpected response"
            else:
                message = f"{provider} API request failed"
        super().__init__(message)


class ProviderTimeoutError(ProviderError):
    """Raised when a provider does not answer within the configured timeout."""

    def __init__(self, provider: str, timeout: float | None) -> None:
        self.timeout = timeout
        waited = f" after {timeout:g}s" if timeout is not None else ""
        super().__init__(provider, message=f"{provider} API request timed out{waited}")


class ProviderClient(ABC):
    """One HTTP contract that turns a prompt into rewritten text."""

    name: Provider
    display_name: str

    def __init__(
        self,
        endpoint: ProviderEndpoint,
        *,
        relay_url: str = "",
        timeout: float | None = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.relay_url = relay_url
        self.timeout = timeout
        self._transport = transport

    @property
    def target_url(self) -> str:
        """Provider URL, routed through the relay when one is configured."""
        if not self.relay_url:
            return self.endpoint.url
        return f"{self.relay_url}{quote(self.endpoint.url, safe='')}"

    async def rewrite(self, prompt: str, credential: str) -> str:
        """Send ``prompt`` with ``credential`` and return the provider's text."""
        payload = self._build_payload(prompt)
        headers = {"content-type": "application/json", **self._auth_headers(credential)}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(self.target_url, json=payload, headers=headers)
            except httpx.TimeoutException as exc:
                raise ProviderTimeoutError(self.display_name, self.timeout) from exc

        if not response.is_success:
            raise ProviderError(self.display_name, status=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(self.display_name, malformed=True) from exc

        try:
            text = self._extract_text(data)
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderError(self.display_name, malformed=True) from exc
        if not isinstance(text, str):
            raise ProviderError(self.display_name, malformed=True)
        return text

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.endpoint.model,
            "max_tokens": self.endpoint.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    @abstractmethod
    def _auth_headers(self, credential: str) -> dict[str, str]:
        """Headers carrying the credential."""

    @abstractmethod
    def _extract_text(self, payload: Any) -> Any:
        """Pull the rewritten text out of a decoded response body."""


class ClaudeProvider(ProviderClient):
    """Anthropic Messages API."""

    name: Provider = "claude"
    display_name = "Claude"
    api_version = "2023-06-01"

    def _auth_headers(self, credential: str) -> dict[str, str]:
        return {"x-api-key": credential, "anthropic-version": self.api_version}

    def _extract_text(self, payload: Any) -> Any:
        # {"content": [{"type": "text", "text": "..."}]}
        return payload["content"][0]["text"]


class OpenAIProvider(ProviderClient):
    """OpenAI Chat Completions API."""

    name: Provider = "openai"
    display_name = "OpenAI"

    def _auth_headers(self, credential: str) -> dict[str, str]:
        return {"authorization": f"Bearer {credential}"}

    def _extract_text(self, payload: Any) -> Any:
        return payload["choices"][0]["message"]["content"]
