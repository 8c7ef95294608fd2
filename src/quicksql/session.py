"""Session façade: read rows as Records, write Records back as SQL.

Architecture::

    ┌────────────────────────────────────────────────────────────────────┐
    │                            Session                                 │
    │                                                                    │
    │   executor: Executor      ← protocol from quicksql.protocols       │
    │   dialect: Dialect        ← from quicksql.dialect                  │
    │                                                                    │
    │   select(sql, *options)   → list[Record]                           │
    │   new_record(*options)    → Record                                 │
    │   create(record)          → ExecResult   (INSERT)                  │
    │   save(record)            → ExecResult   (UPDATE … one row)        │
    │   delete(record)          → ExecResult   (DELETE … one row)        │
    └────────────────────────────────────────────────────────────────────┘

Every call is one blocking round trip to the executor. Executor errors
propagate unchanged; validation errors are raised before anything runs.

Usage::

    session = Session(DBAPIExecutor(conn), dialect="sqlite")
    users = session.select(
        "SELECT id, name FROM users WHERE team = ?",
        Args("blue"), Table("users"), PrimaryKey("id"),
    )
    users[0].set("name", "grace")
    session.save(users[0])
"""

from __future__ import annotations

from quicksql.dialect import Dialect, get_dialect
from quicksql.logging import get_logger
from quicksql.options import Option, build_context
from quicksql.protocols import ExecResult, Executor
from quicksql.record import Record
from quicksql.settings import QuickSQLSettings
from quicksql.statements import Statement, build_delete, build_insert, build_update

logger = get_logger(__name__)


class Session:
    """Schema-less CRUD over an :class:`~quicksql.protocols.Executor`.

    Parameters:
        executor: Anything satisfying the Executor protocol.
        dialect: Dialect instance or registered name. Defaults to
                 ``settings.dialect``.
        settings: Defaults to ``QuickSQLSettings()`` read from the environment.
    """

    def __init__(
        self,
        executor: Executor,
        dialect: Dialect | str | None = None,
        settings: QuickSQLSettings | None = None,
    ) -> None:
        self.executor = executor
        self.settings = settings or QuickSQLSettings()
        if dialect is None:
            dialect = self.settings.dialect
        self.dialect: Dialect = get_dialect(dialect) if isinstance(dialect, str) else dialect

    # -- Read path -------------------------------------------------------------

    def select(self, query: str, *options: Option) -> list[Record]:
        """Run *query* and return one fresh Record per row, in result order.

        ``Table``, ``PrimaryKey`` and ``AutoIncrement`` options tag every
        returned Record; ``Args`` supplies the bind arguments.
        """
        ctx = build_context(options)
        rows = self.executor.query(query, ctx.args)

        records: list[Record] = []
        for row in rows:
            record = Record(ctx.table_name, ctx.primary_key, ctx.auto_increment)
            for column, value in zip(row.columns, row.values):
                record.set(column, value)
            records.append(record)

        logger.debug("select_executed", rows=len(records), table=ctx.table_name or None)
        return records

    def new_record(self, *options: Option) -> Record:
        """Empty Record carrying the given table/primary-key metadata."""
        return Record.from_options(*options)

    # -- Write paths -----------------------------------------------------------

    def create(self, record: Record) -> ExecResult:
        """INSERT every field on *record*.

        With a single-field primary key and auto-increment enabled, the
        generated identifier is written back into that field. If the
        executor reports none, the record is left untouched.

        Raises:
            TableNotSetError: The record has no table name.
        """
        statement = build_insert(record, self.dialect)
        result = self._execute(statement, "create")

        if len(record.primary_key) == 1 and record.auto_increment:
            if result.last_insert_id is None:
                logger.debug("last_insert_id_unavailable", table=record.table_name)
            else:
                record.set(record.primary_key[0], result.last_insert_id)

        logger.debug(
            "record_created",
            table=record.table_name,
            last_insert_id=result.last_insert_id,
        )
        return result

    def save(self, record: Record) -> ExecResult:
        """UPDATE every field on *record*, matching at most one row by primary key.

        Raises:
            TableNotSetError: The record has no table name.
            PrimaryKeyNotSetError: The record declares no primary key.
            PrimaryKeyInvalidError: A primary-key field has no value.
        """
        statement = build_update(record, self.dialect)
        result = self._execute(statement, "save")
        self._check_affected(result, record, "save")
        logger.debug("record_saved", table=record.table_name, rows_affected=result.rows_affected)
        return result

    def delete(self, record: Record) -> ExecResult:
        """DELETE the row matching *record*'s primary key (at most one row).

        Raises:
            TableNotSetError: The record has no table name.
            PrimaryKeyNotSetError: The record declares no primary key.
            PrimaryKeyInvalidError: A primary-key field has no value.
        """
        statement = build_delete(record, self.dialect)
        result = self._execute(statement, "delete")
        self._check_affected(result, record, "delete")
        logger.debug("record_deleted", table=record.table_name, rows_affected=result.rows_affected)
        return result

    # -- Helpers ---------------------------------------------------------------

    def _execute(self, statement: Statement, operation: str) -> ExecResult:
        if self.settings.log_statements:
            logger.debug("statement", operation=operation, sql=statement.sql)
        return self.executor.execute(statement.sql, statement.args)

    @staticmethod
    def _check_affected(result: ExecResult, record: Record, operation: str) -> None:
        # Zero rows usually means a stale primary key; reported, not raised.
        if result.rows_affected == 0:
            logger.warning(
                "no_rows_affected",
                table=record.table_name,
                operation=operation,
                primary_key=list(record.primary_key),
            )


__all__ = ["Session"]
