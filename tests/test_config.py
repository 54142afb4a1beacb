"""Tests for sqlspan._config."""

from __future__ import annotations

import threading

import pytest
from opentelemetry.sdk.trace import TracerProvider

from sqlspan._config import configure, get_backend, reset
from sqlspan.backends.logging import LoggingBackend
from sqlspan.backends.otel import OTelBackend


class TestConfigure:
    def test_configure_with_string_logging(self) -> None:
        configure("logging")
        assert isinstance(get_backend(), LoggingBackend)

    def test_configure_with_string_otel(self) -> None:
        configure("otel")
        assert isinstance(get_backend(), OTelBackend)

    def test_configure_with_instance(self) -> None:
        instance = LoggingBackend()
        configure(instance)
        assert get_backend() is instance

    def test_configure_with_tracer_provider(self) -> None:
        configure(TracerProvider())
        assert isinstance(get_backend(), OTelBackend)

    def test_configure_default_is_otel(self) -> None:
        configure()
        assert isinstance(get_backend(), OTelBackend)

    def test_configure_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown backend"):
            configure("bogus")

    def test_unknown_does_not_replace_existing(self) -> None:
        instance = LoggingBackend()
        configure(instance)
        with pytest.raises(ValueError):
            configure("bogus")
        assert get_backend() is instance


class TestGetBackend:
    def test_auto_installs_otel_on_first_call(self) -> None:
        assert isinstance(get_backend(), OTelBackend)

    def test_returns_same_instance(self) -> None:
        b1 = get_backend()
        b2 = get_backend()
        assert b1 is b2

    def test_concurrent_first_calls_agree(self) -> None:
        seen: list[object] = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            seen.append(get_backend())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(seen) == 8
        assert all(b is seen[0] for b in seen)


class TestReset:
    def test_reset_clears_backend(self) -> None:
        configure("logging")
        b1 = get_backend()
        reset()
        b2 = get_backend()
        assert b1 is not b2
        assert isinstance(b2, OTelBackend)

    def test_configure_replaces_lazily_installed_backend(self) -> None:
        assert isinstance(get_backend(), OTelBackend)
        instance = LoggingBackend()
        configure(instance)
        assert get_backend() is instance
