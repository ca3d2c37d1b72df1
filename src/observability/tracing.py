"""Helpers for correlation identifiers in logs."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from uuid import uuid4

from src.config.logging_config import bind_context, unbind_context

CORRELATION_ID_KEY = "correlation_id"


@contextmanager
def correlation_scope(
    existing_id: str | None = None, **context: str | None
) -> Iterator[str]:
    """Bind a correlation identifier (plus extra context) for the lifetime of the context.

    Context values that are None are not bound.
    """

    correlation_id = existing_id or str(uuid4())
    bound = {key: value for key, value in context.items() if value is not None}
    bind_context(**{CORRELATION_ID_KEY: correlation_id}, **bound)
    try:
        yield correlation_id
    finally:
        unbind_context(CORRELATION_ID_KEY, *bound)


__all__ = ["CORRELATION_ID_KEY", "correlation_scope"]
