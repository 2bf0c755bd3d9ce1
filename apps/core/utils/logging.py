from __future__ import annotations

import logging
from typing import Any

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def log_event(logger: logging.Logger, level: str, message: str, **extra: Any) -> None:
    """
    Structured logging helper. Adds 'event' payload via `extra`; unknown
    levels are logged at INFO.
    """
    logger.log(_LEVELS.get(level, logging.INFO), message, extra={"event": extra})
