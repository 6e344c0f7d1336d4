"""
structlog configuration for the ``timevalue`` package.

Library modules only call ``get_logger(__name__)``. Host applications (or a
test session) call ``configure_logging`` once at startup; until then structlog
falls back to its default console output.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog


def configure_logging(
    level: Optional[str] = None,
    format_json: Optional[bool] = None,
    include_timestamp: bool = True,
) -> None:
    """
    Route structlog through stdlib logging with a console or JSON renderer.

    Args:
        level: Logging level name; defaults to ``EngineSettings.log_level``
        format_json: Emit JSON lines instead of the console renderer;
            defaults to ``EngineSettings.log_json``
        include_timestamp: Add an ISO timestamp to every event
    """
    from timevalue.config import load_settings

    settings = load_settings()
    level = level or settings.log_level
    format_json = settings.log_json if format_json is None else format_json

    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s")
    logging.getLogger().setLevel(log_level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
