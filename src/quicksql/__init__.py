"""quicksql -- schema-less records over a relational store.

Run arbitrary SQL reads, get back dynamically typed :class:`Record` objects,
and write them back with synthesized, parameterized INSERT/UPDATE/DELETE
statements. No model classes, no schema introspection.

Architecture::

    Layer 1 -- Types & Errors
        errors.py       ErrorKind enum + QuickSQLError hierarchy
        value.py        ValueCell (canonical bytes, typed coercion)
        record.py       Record (fields + table/primary-key metadata)
        options.py      Args / PrimaryKey / Table / AutoIncrement

    Layer 2 -- SQL
        protocols.py    Executor protocol, ResultRow, ExecResult
        dialect.py      Placeholders, quoting, single-row bound
        statements.py   INSERT / UPDATE / DELETE synthesis

    Layer 3 -- Façade & Infrastructure
        session.py      Session (select / create / save / delete)
        adapters/       DB-API and SQLAlchemy executors
        logging.py      structlog configuration
        settings.py     QuickSQLSettings (QUICKSQL_* env vars)

Example::

    from quicksql import Args, PrimaryKey, Session, Table
    from quicksql.adapters import DBAPIExecutor

    session = Session(DBAPIExecutor(conn), dialect="sqlite")
    rows = session.select("SELECT id, name FROM t WHERE id = ?", Args(1),
                          Table("t"), PrimaryKey("id"))
    rows[0].set("name", "renamed")
    session.save(rows[0])
"""

from quicksql.dialect import (
    Dialect,
    GenericDialect,
    MySQLDialect,
    PostgreSQLDialect,
    SQLiteDialect,
    get_dialect,
    register_dialect,
)
from quicksql.errors import (
    ErrorContext,
    ErrorKind,
    FatalAccessError,
    InvalidColumnError,
    NullValueError,
    PrimaryKeyInvalidError,
    PrimaryKeyNotSetError,
    QuickSQLError,
    TableNotSetError,
    UnsupportedValueError,
)
from quicksql.options import Args, AutoIncrement, Option, PrimaryKey, SessionContext, Table
from quicksql.protocols import ExecResult, Executor, ResultRow
from quicksql.record import Record
from quicksql.session import Session
from quicksql.settings import QuickSQLSettings
from quicksql.statements import Statement, build_delete, build_insert, build_update
from quicksql.value import ValueCell

__version__ = "0.1.0"

__all__ = [
    # Façade
    "Session",
    "Record",
    "ValueCell",
    # Options
    "Args",
    "AutoIncrement",
    "Option",
    "PrimaryKey",
    "SessionContext",
    "Table",
    # Executor contract
    "ExecResult",
    "Executor",
    "ResultRow",
    # Dialects
    "Dialect",
    "GenericDialect",
    "MySQLDialect",
    "PostgreSQLDialect",
    "SQLiteDialect",
    "get_dialect",
    "register_dialect",
    # Statements
    "Statement",
    "build_delete",
    "build_insert",
    "build_update",
    # Errors
    "ErrorContext",
    "ErrorKind",
    "FatalAccessError",
    "InvalidColumnError",
    "NullValueError",
    "PrimaryKeyInvalidError",
    "PrimaryKeyNotSetError",
    "QuickSQLError",
    "TableNotSetError",
    "UnsupportedValueError",
    # Settings
    "QuickSQLSettings",
]
