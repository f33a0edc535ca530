"""structlog rendering for the ``decval`` logger hierarchy.

Library modules log through ``logging.getLogger(__name__)``. Calling
:func:`configure_logging` gives the ``decval`` logger its own stderr handler
whose formatter runs those records through structlog, as console lines or
JSON. The root logger and the host application's handlers are left alone:
``decval`` records stop propagating once its handler is installed.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "decval"

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.ExtraAdder(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


class _DecvalHandler(logging.StreamHandler):
    """Marker type, so repeated configuration replaces its own handler only."""


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> logging.Logger:
    """Install the structlog-rendered handler on the ``decval`` logger.

    Args:
        verbose: Emit DEBUG records. When False, only WARNING+.
        log_json: Use the JSON renderer instead of the console renderer.

    Returns:
        The configured ``decval`` logger.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_PRE_CHAIN,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_json),
        ],
    )
    handler = _DecvalHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    for existing in [h for h in logger.handlers if isinstance(h, _DecvalHandler)]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
