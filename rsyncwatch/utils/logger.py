"""
Logging setup
"""

import logging
import sys
from typing import Optional, TextIO
import structlog

LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARN': logging.WARNING,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
}


def _printable(value: str) -> str:
    try:
        # undecodable file name bytes arrive as lone surrogates
        raw = value.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return value.encode("utf-8", "backslashreplace").decode("utf-8")
    return raw.decode("utf-8", "backslashreplace")


def escape_undecodable(logger, method_name, event_dict):
    """Render surrogate-escaped path text as backslash escapes"""
    for key, value in event_dict.items():
        if isinstance(value, str):
            event_dict[key] = _printable(value)
    return event_dict


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    stream: Optional[TextIO] = None,
):
    """
    Build a structured logger carrying its own threshold.

    Nothing is configured globally: the returned logger is handed to
    each component that needs one.

    Args:
        level: Log level (DEBUG, INFO, WARN, ERROR)
        log_format: Output format (text, json)
        stream: Output stream, stdout when omitted

    Returns:
        A filtering structlog bound logger
    """
    stream = stream or sys.stdout

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        escape_undecodable,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=stream.isatty())
        )

    return structlog.wrap_logger(
        structlog.PrintLogger(file=stream),
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            LOG_LEVEL_MAP.get(level.upper(), logging.INFO)
        ),
        context_class=dict,
    )
