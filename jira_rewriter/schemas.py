"""Pydantic models for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from jira_rewriter.config_manager import Configuration
from jira_rewriter.prompts import resolve_instruction
from jira_rewriter.types import Provider, StylePreset


class HealthResponse(BaseModel):
    """Response model for /health."""

    status: str
    environment: str
    version: str


class RewritePayload(BaseModel):
    """Request payload for /v1/rewrite."""

    text: str = Field(..., description="Free-form text to turn into a Jira comment.")


class RewriteResponse(BaseModel):
    """Response payload for a successful rewrite."""

    output_text: str = Field(..., description="Jira-formatted text produced by the provider.")
    provider: Provider
    style: StylePreset
    using_custom_prompt: bool


class SettingsResponse(BaseModel):
    """Stored configuration with credentials reduced to presence flags."""

    claude_api_key_set: bool
    openai_api_key_set: bool
    selected_provider: Provider
    selected_style: StylePreset
    custom_prompt: str
    using_custom_prompt: bool
    active_instruction: str

    @classmethod
    def from_configuration(cls, config: Configuration) -> "SettingsResponse":
        return cls(
            claude_api_key_set=bool(config.claude_credential),
            openai_api_key_set=bool(config.openai_credential),
            selected_provider=config.selected_provider,
            selected_style=config.selected_style,
            custom_prompt=config.custom_instruction,
            using_custom_prompt=bool(config.custom_instruction),
            active_instruction=resolve_instruction(config.selected_style, config.custom_instruction),
        )


class SettingsUpdate(BaseModel):
    """Partial settings update; omitted fields are left untouched."""

    claude_api_key: str | None = None
    openai_api_key: str | None = None
    selected_provider: Provider | None = None
    selected_style: StylePreset | None = None
    custom_prompt: str | None = None

    def to_changes(self) -> dict[str, str]:
        """Map set fields onto Configuration attribute names."""
        mapping = {
            "claude_api_key": "claude_credential",
            "openai_api_key": "openai_credential",
            "selected_provider": "selected_provider",
            "selected_style": "selected_style",
            "custom_prompt": "custom_instruction",
        }
        values = self.model_dump(exclude_none=True)
        return {mapping[key]: value for key, value in values.items()}


class StyleInfo(BaseModel):
    """One style preset."""

    key: StylePreset
    label: str
    instruction: str


class ProviderInfo(BaseModel):
    """One provider option."""

    key: Provider
    label: str


class StylesResponse(BaseModel):
    """Available style presets and providers."""

    styles: list[StyleInfo]
    providers: list[ProviderInfo]
