"""Shared constants and callable types for sqlspan."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from sqlspan._context import StatementContext

# Attribute-bag key written by set_parent() and read by SqlSpanLogger.
PARENT_SPAN_ATTRIBUTE_KEY = "io.opentracing.parent"

DEFAULT_OPERATION_NAME = "SQL Statement"
COMPONENT_NAME = "python-sqlspan"

COMPONENT_TAG = "component"
DB_STATEMENT_TAG = "db.statement"

#: Looks up a parent span for a statement that has no explicit parent.
ActiveSpanSource = Callable[["StatementContext"], Any]


class SqlLogger(Protocol):
    """Anything that wants to hear about completed SQL statements."""

    def log_after_execution(self, ctx: StatementContext) -> None: ...
