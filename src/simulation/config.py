from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import structlog

from .errors import InvalidCapacityError

HOME_FLOOR = 0

# Eleven floors with riders bound both ways, used when a run gives no layout
DEMO_LAYOUT = (
    (), (6, 5, 2), (4,), (), (0, 0, 0), (), (), (3, 6, 4, 5, 6), (), (1, 10, 2), (1, 4, 3, 2),
)


@dataclass
class LiftConstraints:
    """Defaults shared by the CLI and the server when a run omits them."""

    capacity: int = 3
    scheduler_name: str = "look"

    def validate(self) -> None:
        if isinstance(self.capacity, bool) or not isinstance(self.capacity, int) or self.capacity < 1:
            raise InvalidCapacityError(self.capacity)


def configure_logging() -> None:
    """
    Set up structured JSON logging for the application using structlog.

    The stdlib logging module emits plain messages and structlog renders
    its own events as JSON with an ISO timestamp and the log level. The
    level comes from the LOG_LEVEL environment variable.
    """
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level, logging.INFO),
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
