import logging
import sys
from pathlib import Path
from typing import TextIO

import structlog

_log_stream: TextIO | None = None


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure structured logging for the debugger process.

    Logs go to stderr, or are appended to ``log_file`` when one is given.
    Multi-line events (cache dumps) are written verbatim, never escaped.
    """
    global _log_stream
    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _log_stream = log_file.open("a")
        logger_factory = structlog.WriteLoggerFactory(file=_log_stream)
        colors = False
    else:
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)
        colors = sys.stderr.isatty()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=colors),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(component: str | None = None, **kwargs: object) -> structlog.BoundLogger:
    """Get a structured logger, optionally bound to a component name."""
    log = structlog.get_logger()
    if component:
        log = log.bind(component=component)
    if kwargs:
        log = log.bind(**kwargs)
    return log
