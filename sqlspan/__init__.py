"""sqlspan: one tracing span per completed SQL statement."""

from sqlspan._config import configure, get_backend, reset
from sqlspan._context import StatementContext
from sqlspan._decorator import SpanDecorator
from sqlspan._logger import SqlSpanLogger, set_parent
from sqlspan._types import (
    COMPONENT_NAME,
    COMPONENT_TAG,
    DB_STATEMENT_TAG,
    DEFAULT_OPERATION_NAME,
    PARENT_SPAN_ATTRIBUTE_KEY,
    ActiveSpanSource,
    SqlLogger,
)
from sqlspan.backends.base import TracingBackend
from sqlspan.version import __version__

__all__ = [
    "COMPONENT_NAME",
    "COMPONENT_TAG",
    "DB_STATEMENT_TAG",
    "DEFAULT_OPERATION_NAME",
    "PARENT_SPAN_ATTRIBUTE_KEY",
    "ActiveSpanSource",
    "SpanDecorator",
    "SqlLogger",
    "SqlSpanLogger",
    "StatementContext",
    "TracingBackend",
    "__version__",
    "configure",
    "get_backend",
    "reset",
    "set_parent",
]
