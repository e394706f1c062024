"""Rewrite orchestration: validation, prompt assembly, provider dispatch, and outcome classification."""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Union

from jira_rewriter.config_manager import ConfigStore, Configuration
from jira_rewriter.logging_utils import content_preview, get_logger
from jira_rewriter.models.client import ProviderClient, ProviderError, ProviderTimeoutError
from jira_rewriter.prompts import build_prompt, resolve_instruction
from jira_rewriter.types import ErrorKind, Provider, RewriteState

logger = get_logger(__name__)


class RewriteValidationError(ValueError):
    """Raised when a rewrite request is rejected before dispatch."""


@dataclass(frozen=True)
class RewriteRequest:
    """Everything derived from one invocation before the provider is called."""

    raw_input: str
    resolved_instruction: str
    full_prompt: str


@dataclass(frozen=True)
class RewriteSuccess:
    text: str


@dataclass(frozen=True)
class RewriteFailure:
    kind: ErrorKind
    detail: str


RewriteOutcome = Union[RewriteSuccess, RewriteFailure]


class RewriteOrchestrator:
    """Runs one rewrite at a time against the provider selected in the configuration.

    State moves ``idle -> validating -> dispatching -> succeeded|failed -> idle``.
    A call made while another is still validating or dispatching is rejected
    with a ``busy`` failure rather than queued.
    """

    def __init__(
        self,
        *,
        config_store: ConfigStore,
        providers: Mapping[Provider, ProviderClient],
        log_content: bool = False,
    ) -> None:
        self._config_store = config_store
        self._providers = dict(providers)
        self._log_content = log_content
        self._state: RewriteState = "idle"

    @property
    def state(self) -> RewriteState:
        return self._state

    async def rewrite(self, raw_input: str, config: Configuration | None = None) -> RewriteOutcome:
        """Rewrite ``raw_input`` using ``config`` (or the stored configuration)."""
        if self._state != "idle":
            logger.warning("Rejected rewrite while another is %s", self._state)
            return RewriteFailure(kind="busy", detail="A rewrite is already in progress")

        self._transition("validating")
        try:
            if config is None:
                config = self._config_store.load()
            try:
                credential = self._validate(raw_input, config)
            except RewriteValidationError as exc:
                return self._fail("validation", str(exc))

            request = self._prepare(raw_input, config)
            provider = self._providers[config.selected_provider]

            self._transition("dispatching")
            start = time.perf_counter()
            try:
                text = await provider.rewrite(request.full_prompt, credential)
            except ProviderTimeoutError as exc:
                return self._fail("timeout", str(exc))
            except ProviderError as exc:
                return self._fail("malformed" if exc.malformed else "provider_status", str(exc))
            except Exception as exc:
                logger.exception("Unexpected failure calling %s", provider.display_name)
                return self._fail("unclassified", str(exc) or "An error occurred")
            latency_ms = (time.perf_counter() - start) * 1000

            logger.info(
                "Rewrite completed | provider=%s style=%s custom=%s latency_ms=%.2f text_len=%d%s",
                config.selected_provider,
                config.selected_style,
                bool(config.custom_instruction),
                latency_ms,
                len(raw_input),
                content_preview(raw_input, enabled=self._log_content),
            )
            self._transition("succeeded")
            return RewriteSuccess(text=text)
        finally:
            self._transition("idle")

    def _validate(self, raw_input: str, config: Configuration) -> str:
        if not raw_input.strip():
            raise RewriteValidationError("Please enter some text to rewrite")
        credential = config.credential_for(config.selected_provider)
        if not credential:
            name = self._providers[config.selected_provider].display_name
            raise RewriteValidationError(f"Please enter your {name} API key in settings")
        return credential

    @staticmethod
    def _prepare(raw_input: str, config: Configuration) -> RewriteRequest:
        return RewriteRequest(
            raw_input=raw_input,
            resolved_instruction=resolve_instruction(config.selected_style, config.custom_instruction),
            full_prompt=build_prompt(raw_input, config.selected_style, config.custom_instruction),
        )

    def _fail(self, kind: ErrorKind, detail: str) -> RewriteFailure:
        logger.warning("Rewrite failed | kind=%s detail=%s", kind, detail)
        self._transition("failed")
        return RewriteFailure(kind=kind, detail=detail)

    def _transition(self, state: RewriteState) -> None:
        logger.debug("Rewrite state %s -> %s", self._state, state)
        self._state = state
