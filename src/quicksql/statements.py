"""Statement synthesis from a Record's metadata and current values.

Pure functions: each validates the record, then returns a
:class:`Statement` (SQL text plus positional arguments). Nothing here talks
to an executor, so an invalid record never produces a partial side effect.

Shapes (``generic`` dialect)::

    INSERT INTO t (a, b) VALUES (?, ?)
    UPDATE t SET a=?, b=? WHERE id=? AND tenant=? LIMIT 1
    DELETE FROM t WHERE id=? AND tenant=? LIMIT 1

Column order follows field insertion order on the record, and the column
list always lines up with the argument list. WHERE clauses follow the
declared primary-key order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from quicksql.dialect import Dialect
from quicksql.errors import PrimaryKeyInvalidError, PrimaryKeyNotSetError, TableNotSetError
from quicksql.record import Record


@dataclass(frozen=True)
class Statement:
    """Rendered SQL and its positional bind arguments."""

    sql: str
    args: tuple[Any, ...]


def validate_for_create(record: Record) -> None:
    if not record.table_name:
        raise TableNotSetError(operation="create")


def validate_for_update_or_delete(record: Record, operation: str) -> None:
    """Shared precondition for save and delete.

    Raises:
        TableNotSetError: The record has no table name.
        PrimaryKeyNotSetError: The record declares no primary-key fields.
    """
    if not record.table_name:
        raise TableNotSetError(operation=operation)
    if not record.primary_key:
        raise PrimaryKeyNotSetError(operation=operation, table=record.table_name)


def _primary_key_predicate(
    record: Record, dialect: Dialect, operation: str, offset: int
) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    args: list[Any] = []
    for i, name in enumerate(record.primary_key):
        if name not in record:
            raise PrimaryKeyInvalidError(name, operation=operation, table=record.table_name)
        clauses.append(f"{dialect.quote(name)}={dialect.placeholder(offset + i)}")
        args.append(record.cell(name).bind_value())
    return " AND ".join(clauses), args


def build_insert(record: Record, dialect: Dialect) -> Statement:
    """``INSERT`` naming every field currently set on *record*."""
    validate_for_create(record)
    columns: list[str] = []
    placeholders: list[str] = []
    args: list[Any] = []
    for i, (name, cell) in enumerate(record.items()):
        columns.append(dialect.quote(name))
        placeholders.append(dialect.placeholder(i))
        args.append(cell.bind_value())

    table = dialect.quote_table(record.table_name)
    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({', '.join(placeholders)})"
    return Statement(sql, tuple(args))


def build_update(record: Record, dialect: Dialect) -> Statement:
    """``UPDATE`` of every field, bounded to the row matching the primary key.

    Primary-key fields appear in the SET clause too; they may be ordinary
    columns being rewritten.
    """
    validate_for_update_or_delete(record, "save")
    assignments: list[str] = []
    args: list[Any] = []
    for i, (name, cell) in enumerate(record.items()):
        assignments.append(f"{dialect.quote(name)}={dialect.placeholder(i)}")
        args.append(cell.bind_value())

    condition, pk_args = _primary_key_predicate(record, dialect, "save", len(args))
    table = dialect.quote_table(record.table_name)
    sql = (
        f"UPDATE {table} SET {', '.join(assignments)} "
        f"{dialect.single_row_filter(table, condition)}"
    )
    return Statement(sql, tuple(args + pk_args))


def build_delete(record: Record, dialect: Dialect) -> Statement:
    """``DELETE`` bounded to the row matching the primary key.

    Only the primary-key fields need to be set on *record*.
    """
    validate_for_update_or_delete(record, "delete")
    condition, pk_args = _primary_key_predicate(record, dialect, "delete", 0)
    table = dialect.quote_table(record.table_name)
    sql = f"DELETE FROM {table} {dialect.single_row_filter(table, condition)}"
    return Statement(sql, tuple(pk_args))


__all__ = [
    "Statement",
    "build_delete",
    "build_insert",
    "build_update",
    "validate_for_create",
    "validate_for_update_or_delete",
]
