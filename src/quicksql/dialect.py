"""SQL dialect abstraction for statement synthesis.

The statement builders in :mod:`quicksql.statements` never hard-code
placeholder style, identifier quoting or the single-row bound applied to
UPDATE/DELETE. They ask a :class:`Dialect` instead.

Architecture::

    ┌────────────────────────────────────────────────────────────────────┐
    │                     Dialect Abstraction Layer                      │
    └────────────────────────────────────────────────────────────────────┘

    ┌──────────┐ ┌──────────────┐ ┌──────────────┐ ┌──────────────────┐
    │ generic  │ │ mysql        │ │ sqlite       │ │ postgresql       │
    │ ?        │ │ %s           │ │ ?            │ │ %s               │
    │ id       │ │ `id`         │ │ "id"         │ │ "id"             │
    │ LIMIT 1  │ │ LIMIT 1      │ │ rowid IN (…) │ │ ctid IN (…)      │
    └──────────┘ └──────────────┘ └──────────────┘ └──────────────────┘

The ``generic`` dialect renders statements such as::

    UPDATE t SET name=?, id=? WHERE id=? LIMIT 1
    DELETE FROM t WHERE id=? LIMIT 1

Stock SQLite and PostgreSQL reject ``LIMIT`` on UPDATE/DELETE, so their
dialects keep the one-row bound through a sub-select on the physical row
identifier instead.

Examples:
    >>> d = get_dialect("mysql")
    >>> d.quote("name")
    '`name`'
    >>> d.placeholder(0)
    '%s'
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Dialect(Protocol):
    """SQL dialect contract.

    Every method returns a SQL fragment valid for the target database.
    """

    @property
    def name(self) -> str:
        """Human-readable dialect name (e.g. ``'sqlite'``)."""
        ...

    def placeholder(self, index: int) -> str:
        """Single positional placeholder (0-based index).

        ``index`` is ignored by anonymous placeholder styles.
        """
        ...

    def quote(self, identifier: str) -> str:
        """Quote a column identifier."""
        ...

    def quote_table(self, table: str) -> str:
        """Quote a possibly schema-qualified (``schema.table``) table name."""
        ...

    def single_row_filter(self, table: str, condition: str) -> str:
        """Clause restricting an UPDATE/DELETE to at most one row.

        ``table`` is already quoted; ``condition`` is the rendered
        primary-key predicate. Returns everything from ``WHERE`` onwards.
        """
        ...


# =========================================================================
# Concrete Dialect Implementations
# =========================================================================


class GenericDialect:
    """``?`` placeholders, bare identifiers, trailing ``LIMIT 1``."""

    @property
    def name(self) -> str:
        return "generic"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "?"

    def quote(self, identifier: str) -> str:
        return identifier

    def quote_table(self, table: str) -> str:
        return table

    def single_row_filter(self, table: str, condition: str) -> str:  # noqa: ARG002
        return f"WHERE {condition} LIMIT 1"


class _QuotingDialect:
    """Shared identifier quoting for dialects with a single quote character."""

    quote_char = '"'

    def quote(self, identifier: str) -> str:
        q = self.quote_char
        return q + identifier.replace(q, q + q) + q

    def quote_table(self, table: str) -> str:
        return ".".join(self.quote(part) for part in table.split("."))


class MySQLDialect(_QuotingDialect):
    """MySQL / MariaDB: ``%s`` placeholders (PyMySQL, mysqlclient), backticks."""

    quote_char = "`"

    @property
    def name(self) -> str:
        return "mysql"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def single_row_filter(self, table: str, condition: str) -> str:  # noqa: ARG002
        return f"WHERE {condition} LIMIT 1"


class SQLiteDialect(_QuotingDialect):
    """SQLite: ``?`` placeholders, double-quoted identifiers, rowid bound.

    Tables declared ``WITHOUT ROWID`` are not supported for save/delete.
    """

    @property
    def name(self) -> str:
        return "sqlite"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "?"

    def single_row_filter(self, table: str, condition: str) -> str:
        return f"WHERE rowid IN (SELECT rowid FROM {table} WHERE {condition} LIMIT 1)"


class PostgreSQLDialect(_QuotingDialect):
    """PostgreSQL: ``%s`` placeholders (psycopg), ctid bound."""

    @property
    def name(self) -> str:
        return "postgresql"

    def placeholder(self, index: int) -> str:  # noqa: ARG002
        return "%s"

    def single_row_filter(self, table: str, condition: str) -> str:
        return f"WHERE ctid IN (SELECT ctid FROM {table} WHERE {condition} LIMIT 1)"


# =========================================================================
# Registry / Factory
# =========================================================================

# Pre-instantiated singletons (dialects are stateless)
_DIALECTS: dict[str, Dialect] = {
    "generic": GenericDialect(),
    "mysql": MySQLDialect(),
    "mariadb": MySQLDialect(),  # alias
    "sqlite": SQLiteDialect(),
    "postgresql": PostgreSQLDialect(),
    "postgres": PostgreSQLDialect(),  # alias
}


def get_dialect(name: str) -> Dialect:
    """Get a dialect by name.

    Args:
        name: One of ``'generic'``, ``'mysql'``, ``'mariadb'``, ``'sqlite'``,
              ``'postgresql'``, ``'postgres'`` or a registered custom name.

    Raises:
        ValueError: If ``name`` is not recognised.
    """
    key = name.lower()
    if key not in _DIALECTS:
        raise ValueError(
            f"Unknown dialect '{name}'. Supported: {sorted(_DIALECTS)}"
        )
    return _DIALECTS[key]


def register_dialect(name: str, dialect: Dialect) -> None:
    """Register a custom dialect implementation.

    Args:
        name: Lookup key (lower-cased automatically).
        dialect: Instance implementing :class:`Dialect`.
    """
    _DIALECTS[name.lower()] = dialect


__all__ = [
    # Protocol
    "Dialect",
    # Implementations
    "GenericDialect",
    "MySQLDialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    # Factory
    "get_dialect",
    "register_dialect",
]
