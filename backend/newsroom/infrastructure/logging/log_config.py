"""Logging setup for the newsroom backend.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides levels. Levels come from Settings, one per category, so SQL echo or
uvicorn access lines can be turned down without losing the editorial and
login trail.

Usage:
    from newsroom.infrastructure.logging.log_config import setup_logging
    setup_logging()   # once, from the FastAPI lifespan
"""

import logging
import sys

from newsroom.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Settings field → loggers it controls.
_CATEGORY_MAP: dict[str, tuple[str, ...]] = {
    "log_level_sql": (
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ),
    "log_level_uvicorn": (
        "uvicorn",
        "uvicorn.access",
        "uvicorn.error",
    ),
    "log_level_content": (
        "newsroom.application.services.article_service",
        "newsroom.application.services.slug_resolver",
        "newsroom.application.services.taxonomy_service",
        "newsroom.infrastructure.database.repositories",
        "newsroom.infrastructure.storage",
    ),
    "log_level_auth": (
        "newsroom.application.services.auth_service",
        "newsroom.presentation.api.v1.endpoints.auth",
        "newsroom.infrastructure.dependencies",
    ),
}

# Image decoding and form parsing emit per-chunk DEBUG records.
_NOISY_LIBRARIES = ("PIL", "multipart", "python_multipart")


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply configured levels and return the effective level per category."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    levels: dict[str, int] = {"root": root.level}
    for field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, field))
        levels[field.removeprefix("log_level_")] = level
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    for name in _NOISY_LIBRARIES:
        logging.getLogger(name).setLevel(max(logging.INFO, root.level))

    logging.getLogger(__name__).debug(
        "Log levels: %s",
        ", ".join(f"{k}={logging.getLevelName(v)}" for k, v in levels.items()),
    )
    return levels


def _parse_level(raw: str) -> int:
    """Level name → logging constant; unknown names fall back to INFO."""
    numeric = logging.getLevelName(raw.strip().upper())
    return numeric if isinstance(numeric, int) else logging.INFO
