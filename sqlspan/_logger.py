"""SqlSpanLogger: turns every completed SQL statement into a span.

Usage::

    import sqlspan
    from sqlspan.contrib.dbapi import TracedConnection

    sql_logger = sqlspan.SqlSpanLogger()          # uses the global backend
    conn = TracedConnection(sqlite3.connect(":memory:"), sql_logger)

    cursor = conn.cursor()
    sqlspan.set_parent(cursor, parent_span)       # optional
    cursor.execute("SELECT COUNT(*) FROM accounts")

Every statement produces one span whose start is backdated by the
statement's measured elapsed time.
"""

from __future__ import annotations

import time
from collections.abc import MutableMapping
from typing import Any

from sqlspan._config import get_backend
from sqlspan._context import StatementContext
from sqlspan._decorator import SpanDecorator
from sqlspan._types import (
    COMPONENT_NAME,
    COMPONENT_TAG,
    DB_STATEMENT_TAG,
    PARENT_SPAN_ATTRIBUTE_KEY,
    ActiveSpanSource,
    SqlLogger,
)
from sqlspan.backends.base import TracingBackend


class SqlSpanLogger:
    """A :class:`SqlLogger` that creates one span per statement.

    Parameters
    ----------
    backend:
        Tracing backend to emit spans with.  Defaults to the process-wide
        backend from :func:`sqlspan.get_backend`, looked up once here.
    span_decorator:
        Names and decorates spans.  Defaults to :attr:`SpanDecorator.DEFAULT`.
    active_span_source:
        Callable returning a parent span for statements that have no
        explicit parent.  Not consulted when ``None``.
    next:
        Another :class:`SqlLogger` to call after this one has ended its span.
    """

    def __init__(
        self,
        backend: TracingBackend | None = None,
        span_decorator: SpanDecorator | None = None,
        active_span_source: ActiveSpanSource | None = None,
        next: SqlLogger | None = None,  # noqa: A002
    ) -> None:
        self.backend = backend if backend is not None else get_backend()
        self.span_decorator = (
            span_decorator if span_decorator is not None else SpanDecorator.DEFAULT
        )
        self.active_span_source = active_span_source
        self.next = next

    def log_after_execution(self, ctx: StatementContext) -> None:
        """Emit a finished span for the statement described by *ctx*."""
        now = time.time_ns()
        name = self.span_decorator.generate_operation_name(ctx)

        parent = ctx.get_attribute(PARENT_SPAN_ATTRIBUTE_KEY)
        if parent is None and self.active_span_source is not None:
            parent = self.active_span_source(ctx)

        span = self.backend.start_span(
            name,
            start_time=now - ctx.elapsed_ns,
            parent=parent,
            attributes={
                COMPONENT_TAG: COMPONENT_NAME,
                DB_STATEMENT_TAG: ctx.raw_sql,
            },
        )
        self.span_decorator.decorate_span(span, ctx)
        span.end(end_time=now)

        if self.next is not None:
            self.next.log_after_execution(ctx)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(backend={self.backend!r})"


def set_parent(statement: Any, parent: Any) -> None:
    """Make *parent* the parent span of the span emitted for *statement*.

    *statement* is a :class:`StatementContext`, anything exposing an
    ``attributes`` mapping (e.g. :class:`~sqlspan.contrib.dbapi.TracedCursor`),
    or the attribute mapping itself.  Must be called before the statement
    executes.
    """
    bag = statement if isinstance(statement, MutableMapping) else getattr(
        statement, "attributes", None
    )
    if not isinstance(bag, MutableMapping):
        raise TypeError(
            f"{type(statement).__name__} has no attribute bag to hold a parent span"
        )
    bag[PARENT_SPAN_ATTRIBUTE_KEY] = parent
