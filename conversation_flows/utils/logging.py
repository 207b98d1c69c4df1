# /conversation_flows/utils/logging.py

import logging
import sys
from typing import Optional

import structlog

from conversation_flows.config.settings import settings

# Module loggers keep using the stdlib API; structlog renders every record
# and merges in whatever is bound for the current turn (conversation_id).

HANDLER_NAME = "conversation_flows"


def _renderer(environment: str):
    if environment == "development":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(level: Optional[str] = None, environment: Optional[str] = None) -> logging.Handler:
    """
    Route stdlib and structlog records through one structlog formatter.

    Runs on every app startup, so a handler installed by an earlier call is
    replaced rather than stacked.
    """
    level = level or settings.log_level
    environment = environment or settings.environment

    pre_chain = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=pre_chain + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, _renderer(environment)],
            foreign_pre_chain=pre_chain,
        )
    )

    root_logger = logging.getLogger()
    for existing in [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return handler
