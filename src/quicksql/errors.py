"""
Structured error types for quicksql.

Every failure raised by the record model and the statement synthesizer is a
:class:`QuickSQLError` subclass tagged with a member of the closed
:class:`ErrorKind` enumeration. Errors carry an :class:`ErrorContext` naming
the column, table and operation involved, so callers can branch on the kind
and log the context without parsing messages.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                      QuickSQLError                           │
        │              (kind, message, context)                        │
        ├──────────────────────────────────────────────────────────────┤
        │  Value access            │  Mutation metadata                │
        │  ────────────            │  ─────────────────                │
        │  NullValueError          │  PrimaryKeyNotSetError            │
        │  InvalidColumnError      │  PrimaryKeyInvalidError           │
        │  UnsupportedValueError   │  TableNotSetError                 │
        └──────────────────────────────────────────────────────────────┘

        FatalAccessError (RuntimeError) -- raised by ``must_*`` accessors,
        outside the hierarchy so ``except QuickSQLError`` never traps it.

What is NOT wrapped:
    - Integer parse failures raise the built-in :class:`ValueError`.
    - Executor/driver exceptions propagate exactly as the driver raised them.

Examples:
    >>> err = NullValueError("name")
    >>> err.kind is ErrorKind.NULL_VALUE
    True
    >>> err.context.column
    'name'

    >>> err = TableNotSetError(operation="save")
    >>> err.to_dict()["operation"]
    'save'

Tags:
    error-handling, exception-hierarchy, error-context, quicksql
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure kinds produced by quicksql.

    Attributes:
        NULL_VALUE: Typed getter invoked on a null field.
        INVALID_COLUMN: Field name not present on the record.
        UNSUPPORTED_VALUE: Stored bytes cannot be coerced to the requested type.
        PRIMARY_KEY_NOT_SET: Mutation on a record with no declared primary key.
        PRIMARY_KEY_INVALID: A declared primary-key field has no value.
        TABLE_NOT_SET: Mutation on a record with no declared table.
    """

    NULL_VALUE = "NULL_VALUE"
    INVALID_COLUMN = "INVALID_COLUMN"
    UNSUPPORTED_VALUE = "UNSUPPORTED_VALUE"
    PRIMARY_KEY_NOT_SET = "PRIMARY_KEY_NOT_SET"
    PRIMARY_KEY_INVALID = "PRIMARY_KEY_INVALID"
    TABLE_NOT_SET = "TABLE_NOT_SET"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to a :class:`QuickSQLError`.

    Only the fields relevant to a failure are set; ``to_dict()`` drops the
    rest so log lines stay short.
    """

    column: str | None = None
    table: str | None = None
    operation: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values."""
        result: dict[str, Any] = {}
        if self.column is not None:
            result["column"] = self.column
        if self.table is not None:
            result["table"] = self.table
        if self.operation is not None:
            result["operation"] = self.operation
        result.update(self.metadata)
        return result


class QuickSQLError(Exception):
    """
    Base class for every failure raised by quicksql.

    Subclasses fix ``kind`` and build a default message; callers may pass a
    custom message to override it.

    Attributes:
        kind: The :class:`ErrorKind` this error belongs to.
        message: Human-readable description.
        context: :class:`ErrorContext` with column/table/operation details.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        column: str | None = None,
        table: str | None = None,
        operation: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()
        if column is not None:
            self.context.column = column
        if table is not None:
            self.context.table = table
        if operation is not None:
            self.context.operation = operation

    def with_context(self, **kwargs: Any) -> QuickSQLError:
        """Add context fields. Returns self for chaining.

        Known fields (``column``, ``table``, ``operation``) are set directly;
        anything else lands in ``context.metadata``.
        """
        for key, value in kwargs.items():
            if key in ("column", "table", "operation"):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        return {
            "error_type": type(self).__name__,
            "kind": self.kind.value,
            "message": self.message,
            **self.context.to_dict(),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, kind={self.kind.value})"


# =============================================================================
# VALUE ACCESS
# =============================================================================


class NullValueError(QuickSQLError):
    """Typed getter invoked on a field whose value is null."""

    kind = ErrorKind.NULL_VALUE

    def __init__(
        self,
        column: str | None = None,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or "quicksql: null value encountered",
            column=column,
            **kwargs,
        )


class InvalidColumnError(QuickSQLError):
    """Field name is not present on the record."""

    kind = ErrorKind.INVALID_COLUMN

    def __init__(self, column: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message or f"quicksql: invalid column {column!r}",
            column=column,
            **kwargs,
        )


class UnsupportedValueError(QuickSQLError):
    """Stored representation cannot be coerced to the requested type."""

    kind = ErrorKind.UNSUPPORTED_VALUE

    def __init__(
        self,
        column: str | None = None,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or "quicksql: unsupported value for casting",
            column=column,
            **kwargs,
        )


# =============================================================================
# MUTATION METADATA
# =============================================================================


class PrimaryKeyNotSetError(QuickSQLError):
    """Mutation attempted on a record with no declared primary-key fields."""

    kind = ErrorKind.PRIMARY_KEY_NOT_SET

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or "quicksql: primary key not set", **kwargs)


class PrimaryKeyInvalidError(QuickSQLError):
    """A declared primary-key field has no current value on the record."""

    kind = ErrorKind.PRIMARY_KEY_INVALID

    def __init__(
        self,
        column: str | None = None,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message or f"quicksql: invalid primary key, field {column!r} has no value",
            column=column,
            **kwargs,
        )


class TableNotSetError(QuickSQLError):
    """Mutation attempted on a record with no declared table name."""

    kind = ErrorKind.TABLE_NOT_SET

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or "quicksql: table not set", **kwargs)


# =============================================================================
# MUST ACCESSORS
# =============================================================================


class FatalAccessError(RuntimeError):
    """Raised by ``must_*`` accessors when the underlying read fails.

    The failing exception (a :class:`QuickSQLError` or a ``ValueError`` from
    integer parsing) is available as ``__cause__`` and as :attr:`cause`.
    """

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"quicksql: must accessor failed: {cause}")
        self.cause = cause


__all__ = [
    "ErrorKind",
    "ErrorContext",
    "QuickSQLError",
    "NullValueError",
    "InvalidColumnError",
    "UnsupportedValueError",
    "PrimaryKeyNotSetError",
    "PrimaryKeyInvalidError",
    "TableNotSetError",
    "FatalAccessError",
]
