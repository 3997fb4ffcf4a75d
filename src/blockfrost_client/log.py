"""structlog setup for applications that want the client's own log events.

The library only calls ``structlog.get_logger(__name__)``, so every event
lands on a stdlib logger under ``blockfrost_client``. ``configure_logging``
attaches one handler there; the root logger and other libraries are left
alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = "blockfrost_client"


def configure_logging(
    level: str = "INFO",
    format: str = "json",
    stream: TextIO | None = None,
) -> structlog.stdlib.BoundLogger:
    """Route ``blockfrost_client.*`` events to ``stream`` and return the package logger.

    Args:
        level: "DEBUG" shows ``request.*`` / ``lister.*`` events, "WARNING"
            only unexpected statuses and listener failures.
        format: "json" (one object per line) or "text" (dev console).
        stream: defaults to ``sys.stdout`` at call time.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers = [handler]
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    package_logger.propagate = False

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # module-level loggers are created at import, before this runs
        cache_logger_on_first_use=False,
    )

    return structlog.stdlib.get_logger(LOGGER_NAME)
