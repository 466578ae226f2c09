"""structlog setup shared by the library and the CLI.

Library modules log through the stdlib ``trisphere`` logger, which
carries a ``NullHandler``, so nothing is written until an application
calls :func:`configure_logging` (the CLI and demo scripts do).
"""

from __future__ import annotations

import logging
import sys

import structlog

_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
]


def install_library_defaults() -> None:
    """Route structlog through stdlib logging without emitting anything.

    Leaves an existing structlog configuration untouched.
    """
    package_logger = logging.getLogger("trisphere")
    if not any(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        package_logger.addHandler(logging.NullHandler())
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.processors.KeyValueRenderer()],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(level: str = "INFO", *, json: bool = False) -> None:
    """Route structlog through the stdlib logger at *level*.

    *json* switches the console renderer for a JSON one (one event per
    line), which is what the CLI uses with ``--log-json``.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )
    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
