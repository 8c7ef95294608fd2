"""PEP 249 (DB-API 2.0) executor adapter.

Usage::

    import sqlite3
    from quicksql import Session
    from quicksql.adapters import DBAPIExecutor

    conn = sqlite3.connect(":memory:")
    session = Session(DBAPIExecutor(conn), dialect="sqlite")
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from quicksql.protocols import ExecResult, ResultRow


class DBAPIExecutor:
    """Adapter: PEP 249 connection → :class:`~quicksql.protocols.Executor`.

    A new cursor is opened for each call and closed before returning, so
    the full result set is materialized inside :meth:`query`.
    """

    def __init__(self, connection: Any) -> None:
        self._conn = connection

    def query(self, sql: str, args: Sequence[Any] = ()) -> list[ResultRow]:
        cursor = self._conn.cursor()
        try:
            cursor.execute(sql, tuple(args))
            columns = tuple(desc[0] for desc in cursor.description or ())
            return [ResultRow(columns, tuple(row)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def execute(self, sql: str, args: Sequence[Any] = ()) -> ExecResult:
        cursor = self._conn.cursor()
        try:
            cursor.execute(sql, tuple(args))
            # Drivers report 0 or None when no id was generated.
            last_insert_id = getattr(cursor, "lastrowid", None) or None
            return ExecResult(rows_affected=cursor.rowcount, last_insert_id=last_insert_id)
        finally:
            cursor.close()

    @property
    def connection(self) -> Any:
        """The wrapped DB-API connection."""
        return self._conn

    def __repr__(self) -> str:
        return f"DBAPIExecutor({self._conn!r})"
