"""
log - structlog setup for cxmlbuilder
"""
from __future__ import annotations

import logging
from typing import Optional

import structlog

from .settings import get_settings


def configure_logging(level: Optional[str] = None, json: Optional[bool] = None) -> None:
    """
    configure_logging - configure structlog for cxmlbuilder events

    level: minimum level name (eg "DEBUG"). Defaults to CXML_LOG_LEVEL
    json: render events as JSON lines instead of the console format.
        Defaults to CXML_LOG_JSON
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    if json is None:
        json = settings.log_json

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
        context_class=dict,
        cache_logger_on_first_use=False,
    )
