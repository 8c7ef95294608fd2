"""Dynamic record: named value cells plus captured table/primary-key metadata.

A :class:`Record` has no declared schema. Fields appear when they are set,
either by :meth:`Session.select <quicksql.session.Session.select>` (one per
result column) or by the caller. The table name, primary-key field list and
auto-increment flag are fixed at construction and never change afterwards.

Eligibility:
    - ``save`` / ``delete`` need a table name *and* a non-empty primary key.
    - ``create`` needs only a table name.

Example::

    record = Record.from_options(Table("users"), PrimaryKey("id"), AutoIncrement())
    record.set("name", "ada")
    record.set("age", 36)

    record.string("name")   # 'ada'
    record.int64("age")     # 36
    record.string("email")  # raises InvalidColumnError
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from quicksql.errors import FatalAccessError, InvalidColumnError, QuickSQLError
from quicksql.options import Option, build_context
from quicksql.value import ValueCell


class Record:
    """An ordered mapping of field name to :class:`ValueCell` with metadata.

    Parameters:
        table_name: Table the record belongs to; ``""`` means unknown.
        primary_key: Primary-key field names in WHERE-clause order.
        auto_increment: Whether the single-field primary key is generated
            by the database on insert.
    """

    __slots__ = ("_values", "_table_name", "_primary_key", "_auto_increment")

    def __init__(
        self,
        table_name: str = "",
        primary_key: Iterable[str] = (),
        auto_increment: bool = False,
    ) -> None:
        self._values: dict[str, ValueCell] = {}
        self._table_name = table_name
        self._primary_key = tuple(primary_key)
        self._auto_increment = auto_increment

    @classmethod
    def from_options(cls, *options: Option) -> Record:
        """Build an empty record from the same options a Session accepts.

        ``Args`` is accepted and ignored.
        """
        ctx = build_context(options)
        return cls(ctx.table_name, ctx.primary_key, ctx.auto_increment)

    # -- Metadata ------------------------------------------------------------

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def primary_key(self) -> tuple[str, ...]:
        return self._primary_key

    @property
    def auto_increment(self) -> bool:
        return self._auto_increment

    # -- Fields --------------------------------------------------------------

    def fields(self) -> list[str]:
        """Snapshot of the field names currently set."""
        return list(self._values)

    def set(self, name: str, value: Any) -> None:
        """Store *value* under *name*, replacing any previous value.

        Never fails: unknown names simply become new fields.
        """
        self._values[name] = ValueCell.of(value)

    def cell(self, name: str) -> ValueCell:
        """Return the cell for *name* or raise :class:`InvalidColumnError`."""
        try:
            return self._values[name]
        except KeyError:
            raise InvalidColumnError(name, table=self._table_name or None) from None

    def items(self) -> list[tuple[str, ValueCell]]:
        return list(self._values.items())

    def raw(self, name: str) -> bytes | None:
        """Canonical bytes for *name* (``None`` when the value is NULL)."""
        return self.cell(name).raw

    def is_null(self, name: str) -> bool:
        return self.cell(name).is_null

    # -- Typed getters -------------------------------------------------------

    def string(self, name: str) -> str:
        return self.cell(name).as_string(name)

    def int64(self, name: str) -> int:
        return self.cell(name).as_int64(name)

    def uint64(self, name: str) -> int:
        return self.cell(name).as_uint64(name)

    def must_string(self, name: str) -> str:
        """Like :meth:`string` but any failure becomes :class:`FatalAccessError`."""
        try:
            return self.string(name)
        except (QuickSQLError, ValueError) as exc:
            raise FatalAccessError(exc) from exc

    def must_int64(self, name: str) -> int:
        try:
            return self.int64(name)
        except (QuickSQLError, ValueError) as exc:
            raise FatalAccessError(exc) from exc

    def must_uint64(self, name: str) -> int:
        try:
            return self.uint64(name)
        except (QuickSQLError, ValueError) as exc:
            raise FatalAccessError(exc) from exc

    # -- Conveniences --------------------------------------------------------

    def to_dict(self) -> dict[str, str | bytes | None]:
        """Field values as text (raw bytes if not UTF-8, ``None`` for NULL)."""
        return {name: cell.bind_value() for name, cell in self._values.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return (
            f"Record(table={self._table_name!r}, primary_key={list(self._primary_key)!r}, "
            f"fields={self.fields()!r})"
        )


__all__ = ["Record"]
