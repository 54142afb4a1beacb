"""Process-wide tracing backend registry (thread-safe).

Configure once at application startup; loggers created without an explicit
backend read it at construction time.
"""

from __future__ import annotations

import threading

from opentelemetry.trace import TracerProvider

from sqlspan.backends.base import TracingBackend

_lock = threading.Lock()
_backend: TracingBackend | None = None


def configure(backend: TracingBackend | TracerProvider | str = "otel") -> None:
    """Set the global tracing backend.

    *backend* can be:
    - A :class:`TracingBackend` instance
    - An OpenTelemetry ``TracerProvider``: wrapped in an :class:`OTelBackend`
    - ``"otel"``: :class:`OTelBackend` on the global tracer provider
    - ``"logging"``: use the built-in :class:`LoggingBackend`
    """
    global _backend
    resolved = _build_backend(backend)
    with _lock:
        _backend = resolved


def get_backend() -> TracingBackend:
    """Return the global backend.

    With nothing configured, the first call installs an :class:`OTelBackend`
    bound to the global tracer provider, so unconfigured processes still
    report through whatever OpenTelemetry SDK the application set up.
    """
    global _backend
    current = _backend
    if current is not None:
        return current
    with _lock:
        if _backend is None:
            _backend = _build_backend("otel")
        return _backend


def reset() -> None:
    """Forget the global backend. Intended for testing."""
    global _backend
    with _lock:
        _backend = None


def _build_backend(backend: TracingBackend | TracerProvider | str) -> TracingBackend:
    if isinstance(backend, TracingBackend):
        return backend
    if isinstance(backend, TracerProvider):
        from sqlspan.backends.otel import OTelBackend

        return OTelBackend(tracer_provider=backend)
    if backend == "otel":
        from sqlspan.backends.otel import OTelBackend

        return OTelBackend()
    if backend == "logging":
        from sqlspan.backends.logging import LoggingBackend

        return LoggingBackend()
    raise ValueError(f"Unknown backend: {backend!r}")
