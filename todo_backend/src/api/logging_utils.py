"""Logging configuration with per-request correlation ids."""

from __future__ import annotations

import contextvars
import logging
from typing import Optional

request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)


class CorrelationFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once and attach the correlation filter to its handlers.
    Safe to call repeatedly (e.g. once per app factory call in tests).
    """
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            format="%(asctime)s level=%(levelname)s logger=%(name)s request_id=%(request_id)s message=\"%(message)s\"",
        )
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in root_logger.handlers:
        if not any(isinstance(f, CorrelationFilter) for f in handler.filters):
            handler.addFilter(CorrelationFilter())


def set_request_id(value: Optional[str]) -> contextvars.Token:
    return request_id_var.set(value)


def reset_request_id(token: contextvars.Token) -> None:
    request_id_var.reset(token)
