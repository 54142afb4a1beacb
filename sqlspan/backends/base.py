"""Abstract base class for tracing backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class TracingBackend(ABC):
    """Interface that all sqlspan tracing backends must implement."""

    @abstractmethod
    def start_span(
        self,
        name: str,
        *,
        start_time: int,
        parent: Any = None,
        attributes: Mapping[str, Any] | None = None,
    ) -> Any:
        """Start and return a span that began at *start_time* (ns since epoch).

        The returned object must support ``set_attribute``, ``add_event``
        and ``end(end_time=...)``.  When *parent* is given the span becomes
        its child.
        """
