"""Shared fixtures for the sqlspan test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)

from sqlspan._config import reset
from sqlspan.backends.otel import OTelBackend


@pytest.fixture(autouse=True)
def _clean_config() -> Iterator[None]:
    reset()
    yield
    reset()


@pytest.fixture
def tracer_provider() -> TracerProvider:
    return TracerProvider()


@pytest.fixture
def exporter(tracer_provider: TracerProvider) -> InMemorySpanExporter:
    exp = InMemorySpanExporter()
    tracer_provider.add_span_processor(SimpleSpanProcessor(exp))
    return exp


@pytest.fixture
def otel_backend(
    tracer_provider: TracerProvider, exporter: InMemorySpanExporter
) -> OTelBackend:
    return OTelBackend(tracer_provider=tracer_provider)
