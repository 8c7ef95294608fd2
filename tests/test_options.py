"""Tests for quicksql.options."""

from __future__ import annotations

import pytest

from quicksql.options import (
    Args,
    AutoIncrement,
    Option,
    PrimaryKey,
    SessionContext,
    Table,
    build_context,
)


class TestDefaults:
    def test_empty_context(self):
        ctx = build_context([])
        assert ctx == SessionContext()
        assert ctx.args == ()
        assert ctx.primary_key == ()
        assert ctx.table_name == ""
        assert ctx.auto_increment is False


class TestEffects:
    def test_primary_key_keeps_order(self):
        ctx = build_context([PrimaryKey("tenant", "id")])
        assert ctx.primary_key == ("tenant", "id")

    def test_auto_increment(self):
        assert build_context([AutoIncrement()]).auto_increment is True

    def test_args(self):
        assert build_context([Args(666, "field_string")]).args == (666, "field_string")

    def test_table(self):
        assert build_context([Table("test_table")]).table_name == "test_table"

    def test_all_together(self):
        ctx = build_context([Table("t"), PrimaryKey("id"), AutoIncrement(), Args(1)])
        assert ctx == SessionContext(
            args=(1,), primary_key=("id",), table_name="t", auto_increment=True
        )


class TestOrdering:
    def test_last_write_wins(self):
        ctx = build_context([Table("first"), PrimaryKey("a"), Table("second"), PrimaryKey("b", "c")])
        assert ctx.table_name == "second"
        assert ctx.primary_key == ("b", "c")

    def test_args_overwrite_not_append(self):
        assert build_context([Args(1, 2), Args(3)]).args == (3,)

    def test_empty_primary_key_clears(self):
        assert build_context([PrimaryKey("id"), PrimaryKey()]).primary_key == ()


class TestOptionShape:
    @pytest.mark.parametrize("option", [Args(), AutoIncrement(), PrimaryKey("id"), Table("t")])
    def test_builtin_options_satisfy_protocol(self, option):
        assert isinstance(option, Option)

    def test_options_are_immutable(self):
        option = Table("t")
        with pytest.raises(AttributeError):
            option.name = "u"  # type: ignore[misc]

    def test_options_compare_by_value(self):
        assert PrimaryKey("id") == PrimaryKey("id")
        assert Args(1, 2) != Args(2, 1)

    def test_custom_option_can_reject(self):
        class RequireTable:
            def apply(self, ctx: SessionContext) -> None:
                if not ctx.table_name:
                    raise ValueError("table required")

        with pytest.raises(ValueError, match="table required"):
            build_context([RequireTable()])
        assert build_context([Table("t"), RequireTable()]).table_name == "t"
