"""Executors over external database drivers.

- :class:`DBAPIExecutor` -- any PEP 249 connection (``sqlite3``, PyMySQL, psycopg).
- :class:`SQLAlchemyExecutor` -- a SQLAlchemy ``Connection`` or ORM ``Session``.

Neither adapter commits or rolls back; transaction boundaries belong to the
caller that owns the connection.
"""

from quicksql.adapters.dbapi import DBAPIExecutor
from quicksql.adapters.sqla import SQLAlchemyExecutor

__all__ = [
    "DBAPIExecutor",
    "SQLAlchemyExecutor",
]
