"""
Executor contract: the single external capability quicksql depends on.

The Session never talks to a driver directly. It needs something that can
run a parameterized read and a parameterized write, and that is all this
module describes.

Architecture:
    ::

        Executor Protocol:
        ┌──────────────────────────────────────────────────────────────┐
        │ query(sql, args)    → Sequence[ResultRow]                    │
        │                       (columns + raw values, in order)       │
        │ execute(sql, args)  → ExecResult                             │
        │                       (rows_affected, last_insert_id | None) │
        └──────────────────────────────────────────────────────────────┘

        Implementations:
        ┌──────────────────────────────────────────────────────────────┐
        │ DBAPIExecutor       → any PEP 249 connection (sqlite3, ...)  │
        │ SQLAlchemyExecutor  → sqlalchemy Connection / Session        │
        │ test doubles        → anything with the same two methods     │
        └──────────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Add transaction or pooling methods to Executor
    ✅ DO: Leave those to the driver and the caller

    ❌ DON'T: Wrap driver exceptions inside an executor
    ✅ DO: Let them propagate so callers see the backend's own error

Tags:
    protocol, executor, database, quicksql, contracts
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class ResultRow:
    """One row of a query result.

    ``columns`` and ``values`` are parallel sequences in projection order.
    Column names are not guaranteed to be unique.
    """

    columns: tuple[str, ...]
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        if len(self.columns) != len(self.values):
            raise ValueError(
                f"row has {len(self.values)} values for {len(self.columns)} columns"
            )


@dataclass(frozen=True)
class ExecResult:
    """Outcome of a write statement.

    ``last_insert_id`` is ``None`` when the backend cannot report one.
    """

    rows_affected: int = 0
    last_insert_id: int | None = None


@runtime_checkable
class Executor(Protocol):
    """
    Minimal SYNCHRONOUS statement executor.

    Both methods block until the backend answers and raise whatever the
    backend raises.

    Examples:
        >>> rows = executor.query("SELECT id, name FROM t WHERE id = ?", (1,))
        >>> rows[0].columns
        ('id', 'name')

        >>> result = executor.execute("DELETE FROM t WHERE id=? LIMIT 1", ("1",))
        >>> result.rows_affected
        1
    """

    def query(self, sql: str, args: Sequence[Any] = ()) -> Sequence[ResultRow]:
        """Run a read statement and return every row. SYNC."""
        ...

    def execute(self, sql: str, args: Sequence[Any] = ()) -> ExecResult:
        """Run a write statement. SYNC."""
        ...


__all__ = [
    "ExecResult",
    "Executor",
    "ResultRow",
]
