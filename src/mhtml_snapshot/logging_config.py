"""
Structured logging configuration using structlog.

The API server and the CLI both call setup_logging() once at startup; library
code only asks for loggers and never configures anything itself.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import settings


def _stderr_logger_factory(*args) -> structlog.PrintLogger:
    # Looked up per call: sys.stderr may be swapped after configuration
    return structlog.PrintLogger(file=sys.stderr)


def setup_logging(log_level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """
    Configure structlog for the decoder service.

    Args:
        log_level: Level name overriding settings.log_level (e.g. "DEBUG")
        json_output: Force JSON (True) or console (False) rendering;
            defaults to settings.log_json
    """
    level = (log_level or settings.log_level).upper()
    use_json = settings.log_json if json_output is None else json_output

    renderer = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
        context_class=dict,
        # stderr keeps stdout free for CLI manifests
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )
