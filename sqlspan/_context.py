"""Per-statement execution context handed to SQL loggers."""

from __future__ import annotations

from typing import Any


class StatementContext:
    """Describes one completed SQL statement.

    Built by a SQL library integration right after the statement finishes
    and passed to :meth:`SqlLogger.log_after_execution`.  ``elapsed_ns`` is
    measured by the integration, not by the logger.  ``attributes`` is a
    mutable bag that callers can fill before execution (see
    :func:`sqlspan.set_parent`).
    """

    __slots__ = ("attributes", "elapsed_ns", "executemany", "parameters", "raw_sql")

    def __init__(
        self,
        raw_sql: str,
        elapsed_ns: int,
        attributes: dict[str, Any] | None = None,
        parameters: Any = None,
        executemany: bool = False,
    ) -> None:
        if elapsed_ns < 0:
            raise ValueError(f"elapsed_ns must not be negative, got {elapsed_ns}")
        self.raw_sql: str = raw_sql
        self.elapsed_ns: int = elapsed_ns
        self.attributes: dict[str, Any] = attributes if attributes is not None else {}
        self.parameters: Any = parameters
        self.executemany: bool = executemany

    @property
    def elapsed_us(self) -> int:
        """Elapsed execution time in whole microseconds."""
        return self.elapsed_ns // 1000

    # -- attribute bag --------------------------------------------------------

    def get_attribute(self, key: str, default: Any = None) -> Any:
        """Return an attribute, or *default* if the key is absent."""
        return self.attributes.get(key, default)

    def define(self, key: str, value: Any) -> None:
        """Set an attribute."""
        self.attributes[key] = value

    def __repr__(self) -> str:
        return (
            f"StatementContext(raw_sql={self.raw_sql!r}, "
            f"elapsed_ns={self.elapsed_ns})"
        )
