from __future__ import annotations

import logging

from jobwizard.config import get_settings


_LOG_CONFIGURED = False


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | None = None) -> None:
    """Set up root logging once per process; ``level`` overrides ``LOG_LEVEL``."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    settings = get_settings()
    root_level = _resolve_level(level or settings.log_level)
    logging.basicConfig(
        level=root_level,
        format=f"%(asctime)s %(levelname)s {settings.app_name} [%(name)s] %(message)s",
    )
    # statement echo only when the app itself runs at DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if root_level <= logging.DEBUG else logging.WARNING
    )
    logging.getLogger("uvicorn.access").setLevel(max(root_level, logging.INFO))
    _LOG_CONFIGURED = True
