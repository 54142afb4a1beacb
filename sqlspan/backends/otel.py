"""OpenTelemetry tracing backend."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import SpanKind, TracerProvider

from sqlspan.backends.base import TracingBackend
from sqlspan.version import __version__


class OTelBackend(TracingBackend):
    """Emits real OpenTelemetry spans for each SQL statement.

    Uses the global tracer provider unless *tracer_provider* is given.
    Without an explicit parent, spans join whatever OpenTelemetry context is
    current on the calling thread.
    """

    def __init__(
        self,
        tracer_name: str = "sqlspan",
        tracer_provider: TracerProvider | None = None,
    ) -> None:
        self.tracer_name = tracer_name
        self._tracer = trace.get_tracer(
            tracer_name, __version__, tracer_provider=tracer_provider
        )

    def start_span(
        self,
        name: str,
        *,
        start_time: int,
        parent: Any = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> trace.Span:
        context = trace.set_span_in_context(parent) if parent is not None else None
        return self._tracer.start_span(
            name,
            context=context,
            kind=SpanKind.CLIENT,
            attributes=attributes,
            start_time=start_time,
        )

    def __repr__(self) -> str:
        return f"OTelBackend(tracer_name={self.tracer_name!r})"
