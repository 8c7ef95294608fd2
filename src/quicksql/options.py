"""Per-call options for Session operations and Record construction.

Each option is a small frozen object whose :meth:`apply` writes one field of
a mutable :class:`SessionContext`. Options are applied strictly in the order
given; a later option of the same kind overwrites an earlier one.

==========================  ==============================================
Option                      Effect on the context
==========================  ==============================================
``PrimaryKey(*names)``      ``primary_key`` (order preserved)
``AutoIncrement()``         ``auto_increment = True``
``Args(*values)``           ``args`` (positional bind arguments)
``Table(name)``             ``table_name``
==========================  ==============================================

Usage::

    records = session.select(
        "SELECT id, name FROM users WHERE team = ?",
        Args("blue"),
        Table("users"),
        PrimaryKey("id"),
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass
class SessionContext:
    """Ephemeral state assembled for a single select/create/save/delete call."""

    args: tuple[Any, ...] = ()
    primary_key: tuple[str, ...] = ()
    table_name: str = ""
    auto_increment: bool = False


@runtime_checkable
class Option(Protocol):
    """A configuration effect applied to a :class:`SessionContext`.

    ``apply`` may raise to reject the context; none of the built-in options
    do.
    """

    def apply(self, ctx: SessionContext) -> None: ...


@dataclass(frozen=True, init=False)
class PrimaryKey:
    """Declare the primary-key field list (composite keys keep their order)."""

    names: tuple[str, ...] = field(default=())

    def __init__(self, *names: str) -> None:
        object.__setattr__(self, "names", tuple(names))

    def apply(self, ctx: SessionContext) -> None:
        ctx.primary_key = self.names


@dataclass(frozen=True)
class AutoIncrement:
    """Mark the single-field primary key as database-generated."""

    def apply(self, ctx: SessionContext) -> None:
        ctx.auto_increment = True


@dataclass(frozen=True, init=False)
class Args:
    """Positional bind arguments passed through to the executor."""

    values: tuple[Any, ...] = field(default=())

    def __init__(self, *values: Any) -> None:
        object.__setattr__(self, "values", tuple(values))

    def apply(self, ctx: SessionContext) -> None:
        ctx.args = self.values


@dataclass(frozen=True)
class Table:
    """Declare the table the records belong to."""

    name: str

    def apply(self, ctx: SessionContext) -> None:
        ctx.table_name = self.name


def build_context(options: Iterable[Option]) -> SessionContext:
    """Return a fresh context with *options* applied in order."""
    ctx = SessionContext()
    for option in options:
        option.apply(ctx)
    return ctx


__all__ = [
    "Args",
    "AutoIncrement",
    "Option",
    "PrimaryKey",
    "SessionContext",
    "Table",
    "build_context",
]
