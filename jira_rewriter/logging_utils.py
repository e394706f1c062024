"""Logging helpers."""

from __future__ import annotations

import logging

# Chatty transport loggers that echo every outbound request line at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: str = "INFO") -> None:
    """Configure application-wide logging."""
    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)


def content_preview(text: str, *, enabled: bool, limit: int = 200) -> str:
    """Return a log suffix with the start of ``text`` when content logging is on."""
    if not enabled:
        return ""
    return f" preview={text[:limit]!r}"
