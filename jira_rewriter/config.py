"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from jira_rewriter.types import Provider


@dataclass(slots=True)
class ProviderEndpoint:
    """Where and how a single provider is called."""

    url: str
    model: str
    max_tokens: int


class Settings(BaseSettings):
    """Pydantic settings wrapper."""

    environment: str = Field(default="development", alias="ENVIRONMENT")
    request_timeout_seconds: float = Field(default=120.0, alias="REQUEST_TIMEOUT_SECONDS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_content_enabled: bool = Field(default=False, alias="LOG_CONTENT_ENABLED")
    config_path: str = Field(default="config/settings.json", alias="CONFIG_PATH")

    # Prefix prepended to the percent-encoded provider URL; empty calls providers directly.
    relay_url: str = Field(default="https://api.allorigins.win/raw?url=", alias="RELAY_URL")
    claude_api_url: str = Field(default="https://api.anthropic.com/v1/messages", alias="CLAUDE_API_URL")
    claude_model: str = Field(default="claude-3-5-sonnet-20241022", alias="CLAUDE_MODEL")
    openai_api_url: str = Field(default="https://api.openai.com/v1/chat/completions", alias="OPENAI_API_URL")
    openai_model: str = Field(default="gpt-4", alias="OPENAI_MODEL")
    max_tokens: int = Field(default=1000, alias="MAX_TOKENS")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def endpoint_for(self, provider: Provider) -> ProviderEndpoint:
        if provider == "claude":
            return ProviderEndpoint(url=self.claude_api_url, model=self.claude_model, max_tokens=self.max_tokens)
        return ProviderEndpoint(url=self.openai_api_url, model=self.openai_model, max_tokens=self.max_tokens)


settings = Settings()
