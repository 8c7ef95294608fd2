"""Value cell: one column value held in canonical byte form.

A :class:`ValueCell` stores either ``None`` (SQL NULL) or the bytes of the
value's text form. Every typed read parses those bytes on demand; nothing
parsed is cached, so the bytes are the only source of truth.

Writes go through :func:`to_canonical`, which normalizes any Python value to
bytes before storage:

==================================  =====================================
Input                               Stored bytes
==================================  =====================================
``None``                            null
``str``                             UTF-8 encoding
``bytes`` / ``bytearray`` / ``memoryview``  copied as-is
``bool``                            ``b"true"`` / ``b"false"``
``int``                             decimal digits
``float``                           ``repr()`` (shortest round-trip form)
``Decimal``                         ``str()``
``datetime``                        ISO 8601 with a space separator
``date`` / ``time``                 ISO 8601
anything else                       ``str(value)`` encoded as UTF-8
==================================  =====================================

Examples:
    >>> ValueCell.of(42).as_int64()
    42
    >>> ValueCell.of("field_string").as_string()
    'field_string'
    >>> ValueCell.of(None).is_null
    True
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from decimal import Decimal
from functools import singledispatch
from typing import Any

from quicksql.errors import NullValueError, UnsupportedValueError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

_SIGNED_DIGITS = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_DIGITS = re.compile(r"[0-9]+")


# -- Canonical conversion --------------------------------------------------


@singledispatch
def to_canonical(value: Any) -> bytes | None:
    """Normalize *value* to its canonical byte form (``None`` for NULL)."""
    return str(value).encode("utf-8")


@to_canonical.register(type(None))
def _(value: None) -> None:
    return None


@to_canonical.register(str)
def _(value: str) -> bytes:
    return value.encode("utf-8")


@to_canonical.register(bytes)
@to_canonical.register(bytearray)
@to_canonical.register(memoryview)
def _(value: bytes | bytearray | memoryview) -> bytes:
    return bytes(value)


@to_canonical.register(bool)
def _(value: bool) -> bytes:
    return b"true" if value else b"false"


@to_canonical.register(int)
def _(value: int) -> bytes:
    return str(value).encode("ascii")


@to_canonical.register(float)
def _(value: float) -> bytes:
    return repr(value).encode("ascii")


@to_canonical.register(Decimal)
def _(value: Decimal) -> bytes:
    return str(value).encode("ascii")


@to_canonical.register(datetime)
def _(value: datetime) -> bytes:
    return value.isoformat(sep=" ").encode("ascii")


@to_canonical.register(date)
@to_canonical.register(time)
def _(value: date | time) -> bytes:
    return value.isoformat().encode("ascii")


# -- Strict integer parsing ------------------------------------------------


def parse_int64(text: str) -> int:
    """Parse base-10 signed text into an int within the int64 range.

    Unlike :func:`int`, surrounding whitespace and ``_`` separators are
    rejected.

    Raises:
        ValueError: If *text* is not a base-10 integer or overflows int64.
    """
    if not _SIGNED_DIGITS.fullmatch(text):
        raise ValueError(f"invalid int64 literal: {text!r}")
    number = int(text, 10)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(f"value out of range for int64: {text!r}")
    return number


def parse_uint64(text: str) -> int:
    """Parse base-10 unsigned text into an int within the uint64 range.

    Raises:
        ValueError: If *text* is not unsigned base-10 digits or overflows uint64.
    """
    if not _UNSIGNED_DIGITS.fullmatch(text):
        raise ValueError(f"invalid uint64 literal: {text!r}")
    number = int(text, 10)
    if number > UINT64_MAX:
        raise ValueError(f"value out of range for uint64: {text!r}")
    return number


# -- Cell ------------------------------------------------------------------


class ValueCell:
    """A single column value stored as canonical bytes or NULL.

    Typed reads take an optional ``column`` name used only to enrich the
    error context.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: bytes | None = None) -> None:
        self._raw = raw

    @classmethod
    def of(cls, value: Any) -> ValueCell:
        """Build a cell from any Python value via :func:`to_canonical`."""
        return cls(to_canonical(value))

    @property
    def raw(self) -> bytes | None:
        return self._raw

    @property
    def is_null(self) -> bool:
        return self._raw is None

    def _require(self, column: str | None) -> bytes:
        if self._raw is None:
            raise NullValueError(column)
        return self._raw

    def as_string(self, column: str | None = None) -> str:
        raw = self._require(column)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UnsupportedValueError(
                column,
                message="quicksql: unsupported value for casting, bytes are not valid UTF-8",
            ) from exc

    def as_int64(self, column: str | None = None) -> int:
        raw = self._require(column)
        return parse_int64(raw.decode("ascii", errors="replace"))

    def as_uint64(self, column: str | None = None) -> int:
        raw = self._require(column)
        return parse_uint64(raw.decode("ascii", errors="replace"))

    def bind_value(self) -> str | bytes | None:
        """Value handed to the executor as a positional argument.

        Text-decodable bytes are bound as ``str`` so drivers apply their
        usual column affinity; anything else is bound as raw ``bytes``.
        """
        if self._raw is None:
            return None
        try:
            return self._raw.decode("utf-8")
        except UnicodeDecodeError:
            return self._raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueCell):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        if self._raw is None:
            return "ValueCell(NULL)"
        return f"ValueCell({self._raw!r})"


__all__ = [
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    "ValueCell",
    "parse_int64",
    "parse_uint64",
    "to_canonical",
]
