"""Centralized logging configuration.

Per-category levels come from Settings, so the uvicorn access log or the
storage layer's debug output can be turned up or down on its own.

Usage:
    from recordhub.infrastructure.logging.log_config import setup_logging
    setup_logging(settings)   # once, from the FastAPI lifespan
"""

import logging
import sys

from recordhub.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Settings field → loggers whose level it controls
CATEGORY_LOGGERS: dict[str, tuple[str, ...]] = {
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_storage": ("recordhub.infrastructure.storage",),
    "log_level_http": ("httpx", "httpcore"),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply the configured levels and return them keyed by logger name."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {"": root.level}
    for field_name, logger_names in CATEGORY_LOGGERS.items():
        level = _parse_level(getattr(settings, field_name))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
            applied[name] = level

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s uvicorn=%s storage=%s http=%s",
        settings.log_level,
        settings.log_level_uvicorn,
        settings.log_level_storage,
        settings.log_level_http,
    )
    return applied


def _parse_level(raw: str) -> int:
    """Level name → logging constant; unknown names fall back to INFO."""
    numeric = getattr(logging, raw.strip().upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO
