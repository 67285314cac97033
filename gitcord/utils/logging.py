"""Structured logging setup using structlog.

gitcord's own modules log through structlog; discord.py, aiohttp and httpx
log through the stdlib. Both paths end in one stderr handler and pass the
same redaction step, so tokens and Discord webhook URLs never reach output
from either side.
"""

from __future__ import annotations

import logging
import re
import sys

import structlog

# (pattern, replacement) pairs applied to every string value
_SENSITIVE_PATTERNS = [
    (
        re.compile(r"(token|key|secret|password|authorization)[\"']?\s*[:=]\s*[\"']?[\w\-\.]+", re.IGNORECASE),
        r"\1=***REDACTED***",
    ),
    (
        re.compile(r"(discord(?:app)?\.com/api/webhooks/\d+/)[\w\-]+", re.IGNORECASE),
        r"\1***REDACTED***",
    ),
]

# Held at WARNING unless the configured level is stricter
QUIET_LOGGERS = ("discord", "aiohttp.access", "httpx", "httpcore")


def _filter_sensitive(
    _logger: structlog.types.WrappedLogger,
    _method: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    for key, value in list(event_dict.items()):
        if not isinstance(value, str):
            continue
        for pattern, replacement in _SENSITIVE_PATTERNS:
            value = pattern.sub(replacement, value)
        event_dict[key] = value
    return event_dict


def _final_processors(json_output: bool) -> list[structlog.types.Processor]:
    if json_output:
        # JSON has no traceback rendering of its own
        return [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        structlog.dev.ConsoleRenderer(),
    ]


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Route structlog and stdlib logging to stderr at *level*."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    if numeric_level <= logging.DEBUG:
        print(
            "gitcord: DEBUG logging includes full webhook payloads. "
            "Keep it off in production.",
            file=sys.stderr,
        )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _filter_sensitive,
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=_final_processors(json_output),
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(numeric_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
