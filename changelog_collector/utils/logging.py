"""Configures structlog on top of the standard library logging module."""

import logging
import sys

import structlog

HANDLER_NAME = "changelog_collector"


def configure_logging(debug: bool = False) -> None:
    """Route structlog events through stdlib logging to stderr.

    Stdout is left to the rendered changelog so it can be piped. Calling this
    again replaces the handler installed by the previous call.
    """
    level = logging.DEBUG if debug else logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=False),
            foreign_pre_chain=[structlog.stdlib.add_log_level],
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers = [existing for existing in root_logger.handlers if existing.get_name() != HANDLER_NAME]
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
