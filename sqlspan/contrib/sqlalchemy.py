"""SQLAlchemy integration driven by engine cursor events.

Usage::

    from sqlalchemy import create_engine, text
    from sqlspan.contrib.sqlalchemy import instrument_engine, with_parent

    engine = create_engine("postgresql+psycopg2://...")
    instrument_engine(engine)

    with engine.connect() as conn:
        conn.execute(with_parent(text("SELECT COUNT(*) FROM accounts"), parent))

SQLAlchemy statements are immutable, so the explicit parent travels as an
execution option; :func:`with_parent` returns a copy of the statement that
carries it.  Options set on the connection or engine are honoured too.
"""

from __future__ import annotations

import logging
import time
from typing import Any, TypeVar

from sqlalchemy import event
from sqlalchemy.engine import Engine

from sqlspan._context import StatementContext
from sqlspan._logger import SqlSpanLogger
from sqlspan._types import PARENT_SPAN_ATTRIBUTE_KEY, SqlLogger

logger = logging.getLogger(__name__)

_INSTRUMENTATION_ATTR = "_is_instrumented_by_sqlspan"
_START_TIMES_KEY = "sqlspan_start_ns"
_EVENTS = ("before_cursor_execute", "after_cursor_execute", "handle_error")

E = TypeVar("E")


class _EngineListeners:
    """The cursor-event listeners attached to one engine.

    Start times live in ``conn.info`` keyed by execution context, so a
    failed execution never leaks its clock into the next one.
    """

    def __init__(self, sql_logger: SqlLogger) -> None:
        self.sql_logger = sql_logger

    def before_cursor_execute(
        self,
        conn: Any,
        _cursor: Any,
        _statement: str,
        _parameters: Any,
        context: Any,
        _executemany: bool,
    ) -> None:
        conn.info.setdefault(_START_TIMES_KEY, {})[id(context)] = time.perf_counter_ns()

    def after_cursor_execute(
        self,
        conn: Any,
        _cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        start = conn.info[_START_TIMES_KEY].pop(id(context))
        options = getattr(context, "execution_options", None) or {}
        self.sql_logger.log_after_execution(
            StatementContext(
                statement,
                time.perf_counter_ns() - start,
                attributes=dict(options),
                parameters=parameters,
                executemany=executemany,
            )
        )

    def handle_error(self, exception_context: Any) -> None:
        conn = exception_context.connection
        if conn is None:
            return
        conn.info.get(_START_TIMES_KEY, {}).pop(
            id(exception_context.execution_context), None
        )


def instrument_engine(engine: Engine, sql_logger: SqlLogger | None = None) -> SqlLogger:
    """Emit a span for every statement executed through *engine*.

    Idempotent: an already instrumented engine keeps its existing logger,
    which is returned.
    """
    existing: _EngineListeners | None = getattr(engine, _INSTRUMENTATION_ATTR, None)
    if existing is not None:
        return existing.sql_logger

    listeners = _EngineListeners(
        sql_logger if sql_logger is not None else SqlSpanLogger()
    )
    for name in _EVENTS:
        event.listen(engine, name, getattr(listeners, name))
    setattr(engine, _INSTRUMENTATION_ATTR, listeners)
    logger.debug("Instrumented engine %r with %r", engine, listeners.sql_logger)
    return listeners.sql_logger


def uninstrument_engine(engine: Engine) -> None:
    """Remove the listeners added by :func:`instrument_engine`, if any."""
    listeners: _EngineListeners | None = getattr(engine, _INSTRUMENTATION_ATTR, None)
    if listeners is None:
        return
    for name in _EVENTS:
        event.remove(engine, name, getattr(listeners, name))
    delattr(engine, _INSTRUMENTATION_ATTR)
    logger.debug("Uninstrumented engine %r", engine)


def with_parent(statement: E, parent: Any) -> E:
    """Return a copy of *statement* whose span will be a child of *parent*."""
    return statement.execution_options(  # type: ignore[attr-defined,no-any-return]
        **{PARENT_SPAN_ATTRIBUTE_KEY: parent}
    )
