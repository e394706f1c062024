"""Shared typing helpers."""

from typing import Literal

Provider = Literal["claude", "openai"]
StylePreset = Literal["professional", "friendly", "concise", "detailed", "update"]
ErrorKind = Literal["validation", "provider_status", "malformed", "timeout", "unclassified", "busy"]
RewriteState = Literal["idle", "validating", "dispatching", "succeeded", "failed"]

PROVIDERS: tuple[Provider, ...] = ("claude", "openai")
STYLES: tuple[StylePreset, ...] = ("professional", "friendly", "concise", "detailed", "update")
