"""Logging setup and per-request correlation ids."""

import logging
import uuid
from contextvars import ContextVar
from typing import Optional

from config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"

REQUEST_ID_HEADER = "X-Request-ID"

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


def get_request_id() -> str:
    """Return the correlation id of the request being handled, or ``-``."""
    return _request_id.get()


def bind_request_id(request_id: Optional[str] = None):
    """Set the correlation id for the current context.

    Args:
        request_id: Incoming id to reuse. A fresh uuid4 hex is used when empty.

    Returns:
        A context token to pass to :func:`reset_request_id`.
    """
    return _request_id.set(request_id or uuid.uuid4().hex)


def reset_request_id(token) -> None:
    _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamps the current correlation id on every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure the root logger once.

    Args:
        level: Log level name, e.g. ``"INFO"``.
    """
    root = logging.getLogger()
    if any(isinstance(f, RequestIdFilter) for h in root.handlers for f in h.filters):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)
    root.setLevel(level.upper())
