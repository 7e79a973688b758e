"""
Logging utilities shared across the application.
"""

import logging
from contextvars import ContextVar
from typing import Optional

# Context variable for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)


class RequestContextFilter(logging.Filter):
    """Attach the current request ID to every log record"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, 'request_id', None):
            record.request_id = request_id.get() or '-'
        return True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
