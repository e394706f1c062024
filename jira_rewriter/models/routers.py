"""Registry mapping each provider name to its client variant."""

from __future__ import annotations

import httpx

from jira_rewriter.config import Settings
from jira_rewriter.models.client import ClaudeProvider, OpenAIProvider, ProviderClient
from jira_rewriter.types import Provider

PROVIDER_CLIENTS: dict[Provider, type[ProviderClient]] = {
    "claude": ClaudeProvider,
    "openai": OpenAIProvider,
}


def resolve_provider_class(provider: Provider) -> type[ProviderClient]:
    """Return the client class registered for ``provider``."""
    try:
        return PROVIDER_CLIENTS[provider]
    except KeyError:
        available = ", ".join(sorted(PROVIDER_CLIENTS))
        raise ValueError(f"Unknown provider '{provider}'. Available: {available}") from None


def build_providers(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[Provider, ProviderClient]:
    """Instantiate every registered provider from process settings."""
    return {
        name: resolve_provider_class(name)(
            settings.endpoint_for(name),
            relay_url=settings.relay_url,
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )
        for name in PROVIDER_CLIENTS
    }
