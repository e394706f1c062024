"""FastAPI entrypoint for the Jira Rewriter backend."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, status

from jira_rewriter import __version__, schemas
from jira_rewriter.config import settings
from jira_rewriter.config_manager import ConfigStore
from jira_rewriter.logging_utils import configure_logging, get_logger
from jira_rewriter.models.routers import build_providers
from jira_rewriter.prompts import PROVIDER_LABELS, STYLE_LABELS, STYLE_PRESETS
from jira_rewriter.services.rewriting import RewriteFailure, RewriteOrchestrator
from jira_rewriter.types import ErrorKind

configure_logging(level=settings.log_level)
logger = get_logger(__name__)

app = FastAPI(title="Jira Rewriter Backend")
config_store = ConfigStore(Path(settings.config_path))

FAILURE_STATUS: dict[ErrorKind, int] = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "busy": status.HTTP_409_CONFLICT,
    "timeout": status.HTTP_504_GATEWAY_TIMEOUT,
    "provider_status": status.HTTP_502_BAD_GATEWAY,
    "malformed": status.HTTP_502_BAD_GATEWAY,
    "unclassified": status.HTTP_502_BAD_GATEWAY,
}


@lru_cache(maxsize=1)
def get_orchestrator() -> RewriteOrchestrator:
    """Instantiate the rewrite orchestrator."""
    return RewriteOrchestrator(
        config_store=config_store,
        providers=build_providers(settings),
        log_content=settings.log_content_enabled,
    )


@app.get("/health", response_model=schemas.HealthResponse)
async def health() -> schemas.HealthResponse:
    """Simple health-check endpoint."""
    return schemas.HealthResponse(
        status="ok",
        environment=settings.environment,
        version=__version__,
    )


@app.get("/settings", response_model=schemas.SettingsResponse)
async def get_settings() -> schemas.SettingsResponse:
    """Return the stored configuration."""
    return schemas.SettingsResponse.from_configuration(config_store.load())


@app.post("/settings", response_model=schemas.SettingsResponse)
async def update_settings(payload: schemas.SettingsUpdate) -> schemas.SettingsResponse:
    """Apply and persist a partial configuration update."""
    try:
        config = config_store.update(**payload.to_changes())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return schemas.SettingsResponse.from_configuration(config)


@app.get("/styles", response_model=schemas.StylesResponse)
async def list_styles() -> schemas.StylesResponse:
    """Return the style presets and provider options."""
    return schemas.StylesResponse(
        styles=[
            schemas.StyleInfo(key=key, label=STYLE_LABELS[key], instruction=instruction)
            for key, instruction in STYLE_PRESETS.items()
        ],
        providers=[schemas.ProviderInfo(key=key, label=label) for key, label in PROVIDER_LABELS.items()],
    )


@app.post("/v1/rewrite", response_model=schemas.RewriteResponse)
async def rewrite_text(
    payload: schemas.RewritePayload,
    orchestrator: RewriteOrchestrator = Depends(get_orchestrator),
) -> schemas.RewriteResponse:
    """Main rewrite endpoint."""
    config = config_store.load()
    outcome = await orchestrator.rewrite(payload.text, config)

    if isinstance(outcome, RewriteFailure):
        raise HTTPException(status_code=FAILURE_STATUS[outcome.kind], detail=outcome.detail)

    return schemas.RewriteResponse(
        output_text=outcome.text,
        provider=config.selected_provider,
        style=config.selected_style,
        using_custom_prompt=bool(config.custom_instruction),
    )
