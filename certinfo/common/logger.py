"""Logging configuration using structlog.

Library modules only ask for a logger:

    from certinfo.common.logger import get_logger
    logger = get_logger(__name__)
    logger.debug("extension.decode_failed", oid="2.5.29.15")

Entry points (the inspection CLI) call `configure_logging()` once.
"""

import logging
import sys

import structlog
from structlog.types import Processor


def configure_logging(level: str = "WARNING", fmt: str = "console") -> None:
    """Route structlog through stdlib logging on stderr.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        fmt: "json" for JSON lines, anything else for console output
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if fmt == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=False, exception_formatter=structlog.dev.plain_traceback
        )

    structlog.configure(
        processors=shared_processors
        + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # Report text goes to stdout, so logs stay on stderr
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
