"""PEP 249 (DB-API 2.0) integration.

Wrap any DB-API connection so that every successful ``execute``,
``executemany`` and ``callproc`` produces a span::

    import sqlite3
    from sqlspan.contrib.dbapi import instrument_connection

    conn = instrument_connection(sqlite3.connect("app.db"))
    cursor = conn.cursor()
    sqlspan.set_parent(cursor, parent_span)   # optional, per cursor
    cursor.execute("SELECT COUNT(*) FROM accounts")

A :class:`TracedCursor` carries its own attribute bag, so a parent set on a
cursor applies to every statement executed through it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import wrapt

from sqlspan._context import StatementContext
from sqlspan._logger import SqlSpanLogger
from sqlspan._types import SqlLogger

logger = logging.getLogger(__name__)


def _statement_text(args: tuple[Any, ...]) -> str:
    if not args:
        return ""
    operation = args[0]
    if isinstance(operation, bytes):
        return operation.decode("utf8", "replace")
    return str(operation)


class TracedCursor(wrapt.ObjectProxy):  # type: ignore[misc]
    """Cursor proxy that reports each completed statement to a SQL logger."""

    def __init__(self, cursor: Any, sql_logger: SqlLogger) -> None:
        super().__init__(cursor)
        self._self_sql_logger = sql_logger
        self._self_attributes: dict[str, Any] = {}

    @property
    def attributes(self) -> dict[str, Any]:
        """Attribute bag shared by every statement run on this cursor."""
        return self._self_attributes

    @property
    def sql_logger(self) -> SqlLogger:
        return self._self_sql_logger

    def _traced(
        self,
        method: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        executemany: bool = False,
    ) -> Any:
        start = time.perf_counter_ns()
        result = method(*args, **kwargs)
        elapsed = time.perf_counter_ns() - start

        self._self_sql_logger.log_after_execution(
            StatementContext(
                _statement_text(args),
                elapsed,
                attributes=self._self_attributes,
                parameters=args[1] if len(args) > 1 else None,
                executemany=executemany,
            )
        )
        return result

    def execute(self, *args: Any, **kwargs: Any) -> Any:
        return self._traced(self.__wrapped__.execute, args, kwargs)

    def executemany(self, *args: Any, **kwargs: Any) -> Any:
        return self._traced(
            self.__wrapped__.executemany, args, kwargs, executemany=True
        )

    def callproc(self, *args: Any, **kwargs: Any) -> Any:
        return self._traced(self.__wrapped__.callproc, args, kwargs)

    def __enter__(self) -> TracedCursor:
        self.__wrapped__.__enter__()
        return self

    def __exit__(self, *args: Any) -> Any:
        return self.__wrapped__.__exit__(*args)


class TracedConnection(wrapt.ObjectProxy):  # type: ignore[misc]
    """Connection proxy whose cursors are :class:`TracedCursor` instances."""

    def __init__(self, connection: Any, sql_logger: SqlLogger | None = None) -> None:
        super().__init__(connection)
        self._self_sql_logger = sql_logger if sql_logger is not None else SqlSpanLogger()

    @property
    def sql_logger(self) -> SqlLogger:
        return self._self_sql_logger

    def cursor(self, *args: Any, **kwargs: Any) -> TracedCursor:
        return TracedCursor(
            self.__wrapped__.cursor(*args, **kwargs), self._self_sql_logger
        )

    # Driver shortcuts (e.g. sqlite3.Connection.execute) bypass the cursor
    # proxy, so route them through a traced cursor.
    def execute(self, *args: Any, **kwargs: Any) -> TracedCursor:
        cursor = self.cursor()
        cursor.execute(*args, **kwargs)
        return cursor

    def executemany(self, *args: Any, **kwargs: Any) -> TracedCursor:
        cursor = self.cursor()
        cursor.executemany(*args, **kwargs)
        return cursor

    def __enter__(self) -> TracedConnection:
        self.__wrapped__.__enter__()
        return self

    def __exit__(self, *args: Any) -> Any:
        return self.__wrapped__.__exit__(*args)


def instrument_connection(
    connection: Any, sql_logger: SqlLogger | None = None
) -> TracedConnection:
    """Return *connection* wrapped in a :class:`TracedConnection`.

    Connections that are already traced are returned unchanged.
    """
    if isinstance(connection, TracedConnection):
        return connection
    logger.debug("Tracing DB-API connection %r", connection)
    return TracedConnection(connection, sql_logger)


def uninstrument_connection(connection: Any) -> Any:
    """Return the underlying connection of a :class:`TracedConnection`."""
    if isinstance(connection, TracedConnection):
        return connection.__wrapped__
    return connection
