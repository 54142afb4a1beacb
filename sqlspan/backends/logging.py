"""Logging-based tracing backend (no tracing SDK required)."""

from __future__ import annotations

import logging
import secrets
import time
import uuid
from collections.abc import Mapping
from typing import Any

from sqlspan.backends.base import TracingBackend


class LoggedSpan:
    """A minimal span that emits one structured log record when ended."""

    def __init__(
        self,
        name: str,
        logger: logging.Logger,
        start_time: int,
        parent: LoggedSpan | None = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> None:
        self.name = name
        self.start_time = start_time
        self.end_time: int | None = None
        self.trace_id: str = parent.trace_id if parent is not None else uuid.uuid4().hex
        self.span_id: str = secrets.token_hex(8)
        self.parent_id: str | None = parent.span_id if parent is not None else None
        self.attributes: dict[str, Any] = dict(attributes or {})
        self.events: list[dict[str, Any]] = []
        self._logger = logger

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def add_event(
        self,
        name: str,
        attributes: Mapping[str, Any] | None = None,
        timestamp: int | None = None,
    ) -> None:
        self.events.append(
            {
                "name": name,
                "attributes": dict(attributes or {}),
                "timestamp": timestamp if timestamp is not None else time.time_ns(),
            }
        )

    @property
    def is_ended(self) -> bool:
        return self.end_time is not None

    def end(self, end_time: int | None = None) -> None:
        if self.end_time is not None:
            self._logger.warning("Span %r already ended", self.name)
            return
        self.end_time = end_time if end_time is not None else time.time_ns()
        self._logger.info(
            "sql.span",
            extra={
                "operation": self.name,
                "trace_id": self.trace_id,
                "span_id": self.span_id,
                "parent_id": self.parent_id,
                "duration_ms": (self.end_time - self.start_time) / 1e6,
                "attributes": dict(self.attributes),
                "events": list(self.events),
            },
        )

    def __repr__(self) -> str:
        return f"LoggedSpan(name={self.name!r}, span_id={self.span_id!r})"


class LoggingBackend(TracingBackend):
    """Emits one ``sql.span`` log record per finished statement span."""

    def __init__(self, logger_name: str = "sqlspan") -> None:
        self.logger = logging.getLogger(logger_name)

    def start_span(
        self,
        name: str,
        *,
        start_time: int,
        parent: Any = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> LoggedSpan:
        if parent is not None and not isinstance(parent, LoggedSpan):
            raise TypeError(
                f"LoggingBackend can only parent to LoggedSpan, got {type(parent).__name__}"
            )
        return LoggedSpan(
            name,
            self.logger,
            start_time,
            parent=parent,
            attributes=attributes,
        )

    def __repr__(self) -> str:
        return f"LoggingBackend(logger_name={self.logger.name!r})"
