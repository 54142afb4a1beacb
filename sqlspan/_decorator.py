"""Span naming and decoration hooks."""

from __future__ import annotations

from typing import Any, ClassVar

from sqlspan._context import StatementContext
from sqlspan._types import DEFAULT_OPERATION_NAME


class SpanDecorator:
    """Controls how statement spans are named and decorated.

    Subclass and override either method::

        class TableDecorator(SpanDecorator):
            def generate_operation_name(self, ctx):
                return ctx.raw_sql.split(None, 1)[0].upper()

            def decorate_span(self, span, ctx):
                span.set_attribute("db.elapsed_us", ctx.elapsed_us)
    """

    DEFAULT: ClassVar[SpanDecorator]

    def generate_operation_name(self, ctx: StatementContext) -> str:
        """Return the operation name for the span created for *ctx*."""
        return DEFAULT_OPERATION_NAME

    def decorate_span(self, span: Any, ctx: StatementContext) -> None:
        """Add tags or events to *span* before it is ended."""


SpanDecorator.DEFAULT = SpanDecorator()
