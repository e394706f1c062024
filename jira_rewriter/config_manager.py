"""Persistent store for the user-editable rewriter configuration."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any

from jira_rewriter.logging_utils import get_logger
from jira_rewriter.types import PROVIDERS, STYLES, Provider, StylePreset

logger = get_logger(__name__)

# Persisted JSON key -> Configuration attribute.
_FIELD_KEYS: dict[str, str] = {
    "claudeApiKey": "claude_credential",
    "openaiApiKey": "openai_credential",
    "selectedModel": "selected_provider",
    "customPrompt": "custom_instruction",
    "selectedStyle": "selected_style",
}

_ENUM_FIELDS: dict[str, tuple[str, ...]] = {
    "selected_provider": PROVIDERS,
    "selected_style": STYLES,
}


@dataclass(frozen=True)
class Configuration:
    """User settings persisted between sessions. Empty strings mean unset."""

    claude_credential: str = ""
    openai_credential: str = ""
    selected_provider: Provider = "claude"
    custom_instruction: str = ""
    selected_style: StylePreset = "professional"

    def credential_for(self, provider: Provider) -> str:
        """Return the credential stored for ``provider``."""
        if provider == "claude":
            return self.claude_credential
        return self.openai_credential

    def to_record(self) -> dict[str, str]:
        """Serialise to the persisted JSON shape."""
        values = asdict(self)
        return {key: values[attr] for key, attr in _FIELD_KEYS.items()}

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Configuration":
        """Build from a persisted record, defaulting any damaged field."""
        defaults = cls()
        values: dict[str, Any] = {}
        for key, attr in _FIELD_KEYS.items():
            value = data.get(key)
            if not isinstance(value, str):
                continue
            allowed = _ENUM_FIELDS.get(attr)
            if allowed is not None and value not in allowed:
                logger.warning("Ignoring invalid %s=%r in stored settings", key, value)
                continue
            values[attr] = value
        return replace(defaults, **values)


class ConfigStore:
    """Loads and persists the rewriter configuration as a single JSON record."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Configuration:
        """Return the stored configuration, or defaults if absent or unreadable."""
        if not self._path.exists():
            return Configuration()
        try:
            with self._path.open("r", encoding="utf-8") as file:
                data = json.load(file)
        except (OSError, ValueError):
            logger.warning("Failed to read settings at %s, using defaults", self._path, exc_info=True)
            return Configuration()
        if not isinstance(data, dict):
            logger.warning("Settings at %s are not a JSON object, using defaults", self._path)
            return Configuration()
        return Configuration.from_record(data)

    def save(self, config: Configuration) -> None:
        """Replace the stored record. Failures are logged, never raised."""
        with self._lock:
            self._write(config.to_record())

    def update(self, **changes: Any) -> Configuration:
        """Apply field changes, persist them, and return the new configuration."""
        known = {f.name for f in fields(Configuration)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")
        for attr, allowed in _ENUM_FIELDS.items():
            if attr in changes and changes[attr] not in allowed:
                raise ValueError(f"Invalid {attr} {changes[attr]!r}; expected one of {', '.join(allowed)}")

        with self._lock:
            updated = replace(self.load(), **changes)
            self._write(updated.to_record())
        logger.info("Settings updated | fields=%s", ",".join(sorted(changes)))
        return updated

    def _write(self, data: dict[str, Any]) -> None:
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as file:
                json.dump(data, file, indent=2)
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError:
            logger.warning("Failed to save settings to %s", self._path, exc_info=True)
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
