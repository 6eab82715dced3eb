"""
Structured logging setup.

Every module logs through ``structlog.get_logger(__name__)`` with snake_case
event names and key/value context; this module decides how those events are
rendered (JSON lines in deployed environments, a readable console in development).
"""

import logging
import sys

import structlog
from structlog.types import Processor

from health_risk.config import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Configure structlog and the stdlib root logger from a LoggingConfig."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.enable_file_logging:
        handlers.append(logging.FileHandler(config.log_file_path, encoding="utf-8"))

    logging.basicConfig(format="%(message)s", level=config.level, handlers=handlers, force=True)

    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if config.format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
