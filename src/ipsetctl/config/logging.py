"""Route ipsetctl log events through one structlog-formatted stderr handler.

The retry controller emits structlog events (``ipset.conflict``,
``ipset.retry_exhausted``, ``ipset.cancelled``) with the IP set name and
CIDR bound; the mutation cycle logs through plain ``logging``. Both end up
in the same handler, rendered for a terminal by default or as JSON lines
under ``--log-json``.

The boto3, botocore and urllib3 loggers stay pinned at WARNING even with
``--verbose``.
"""

from __future__ import annotations

import logging
import sys

import structlog

_NOISY_LOGGERS = ("boto3", "botocore", "urllib3")


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and route everything to stderr.

    Args:
        verbose: ``ipsetctl`` loggers emit DEBUG. When False, only WARNING+.
        log_json: Use the JSON renderer instead of the console renderer.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("ipsetctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
