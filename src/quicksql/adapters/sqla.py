"""SQLAlchemy executor adapter.

Wraps a SQLAlchemy ``Connection`` or ORM ``Session`` so quicksql can share
an engine (and its pool) with the rest of an application.

Positional placeholders in either style the dialects emit, ``?`` (qmark)
and ``%s`` (format), are rewritten to named ``:p0, :p1, …`` binds for
:func:`sqlalchemy.text`. A doubled ``%%`` is the format-style escape for a
literal percent sign and becomes ``%``; :func:`sqlalchemy.text` re-escapes
it for drivers that need it. Placeholders inside quoted SQL string
literals are rewritten too; bind such values as arguments instead.

Usage::

    from sqlalchemy import create_engine
    from quicksql import Session
    from quicksql.adapters import SQLAlchemyExecutor

    engine = create_engine("postgresql+psycopg2://…")
    with engine.connect() as conn:
        session = Session(SQLAlchemyExecutor(conn), dialect="postgresql")
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.orm import Session as OrmSession
from sqlalchemy.sql.elements import TextClause

from quicksql.protocols import ExecResult, ResultRow

_PLACEHOLDER = re.compile(r"%%|%s|\?")


def to_named_binds(sql: str, args: Sequence[Any]) -> tuple[TextClause, dict[str, Any]]:
    """Rewrite ``?`` / ``%s`` placeholders into ``:pN`` binds and build the mapping."""
    idx = 0

    def _named(match: re.Match[str]) -> str:
        nonlocal idx
        if match.group() == "%%":
            return "%"
        name = f":p{idx}"
        idx += 1
        return name

    rewritten = _PLACEHOLDER.sub(_named, sql)
    mapping = {f"p{i}": v for i, v in enumerate(args)}
    return text(rewritten), mapping


class SQLAlchemyExecutor:
    """Adapter: SQLAlchemy ``Connection`` / ``Session`` → Executor protocol."""

    def __init__(self, bind: Connection | OrmSession) -> None:
        self._bind = bind

    def query(self, sql: str, args: Sequence[Any] = ()) -> list[ResultRow]:
        stmt, params = to_named_binds(sql, args)
        result = self._bind.execute(stmt, params)
        columns = tuple(result.keys())
        return [ResultRow(columns, tuple(row)) for row in result.fetchall()]

    def execute(self, sql: str, args: Sequence[Any] = ()) -> ExecResult:
        stmt, params = to_named_binds(sql, args)
        result = self._bind.execute(stmt, params)
        last_insert_id = getattr(result, "lastrowid", None) or None
        return ExecResult(rows_affected=result.rowcount, last_insert_id=last_insert_id)

    @property
    def bind(self) -> Connection | OrmSession:
        """The wrapped SQLAlchemy connection or session."""
        return self._bind
