"""
Per-request context shared between middleware and logging.

The correlation id of the request being served is kept in a
context variable so every log record emitted while handling the
request can carry it without passing it around explicitly.
"""

from contextvars import ContextVar, Token
from typing import Optional

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> Optional[str]:
    """Return the correlation id of the current request, if any."""
    return _correlation_id.get()


def bind_correlation_id(correlation_id: str) -> Token:
    """Bind a correlation id to the current context."""
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token) -> None:
    """Restore the context to the state before `bind_correlation_id`."""
    _correlation_id.reset(token)
