"""Tests for quicksql.session against a recording executor."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from quicksql.dialect import MySQLDialect
from quicksql.errors import (
    NullValueError,
    PrimaryKeyInvalidError,
    PrimaryKeyNotSetError,
    TableNotSetError,
)
from quicksql.options import Args, AutoIncrement, PrimaryKey, Table
from quicksql.protocols import ExecResult, ResultRow
from quicksql.record import Record
from quicksql.session import Session
from quicksql.settings import QuickSQLSettings


@pytest.fixture
def session(recording_executor) -> Session:
    return Session(recording_executor, settings=QuickSQLSettings(dialect="generic"))


class TestConstruction:
    def test_dialect_from_settings(self, recording_executor):
        s = Session(recording_executor, settings=QuickSQLSettings(dialect="mysql"))
        assert s.dialect.name == "mysql"

    def test_dialect_by_name_wins(self, recording_executor):
        s = Session(recording_executor, dialect="sqlite", settings=QuickSQLSettings(dialect="mysql"))
        assert s.dialect.name == "sqlite"

    def test_dialect_instance(self, recording_executor):
        d = MySQLDialect()
        assert Session(recording_executor, dialect=d).dialect is d


class TestSelect:
    def test_end_to_end_single_row(self, session, recording_executor):
        recording_executor.add_row(id=1, name="field_string")

        records = session.select("SELECT id, name FROM t")

        assert len(records) == 1
        record = records[0]
        assert set(record.fields()) == {"id", "name"}
        assert record.string("name") == "field_string"
        assert record.int64("id") == 1
        assert recording_executor.queries == [("SELECT id, name FROM t", ())]

    def test_fields_match_projection_including_aliases(self, session, recording_executor):
        recording_executor.add_row(id=1, alias=555.66)
        (record,) = session.select("SELECT id, field_decimal AS alias FROM test_table")
        assert sorted(record.fields()) == ["alias", "id"]
        assert record.string("alias") == "555.66"

    def test_args_are_passed_through(self, session, recording_executor):
        session.select("SELECT * FROM t WHERE a = ? AND b = ?", Args(666, "field_string"))
        assert recording_executor.queries[0][1] == (666, "field_string")

    def test_records_are_tagged_with_metadata(self, session, recording_executor):
        recording_executor.add_row(id=1)
        recording_executor.add_row(id=2)
        records = session.select(
            "SELECT id FROM t", Table("t"), PrimaryKey("id"), AutoIncrement()
        )
        assert [r.int64("id") for r in records] == [1, 2]
        for r in records:
            assert r.table_name == "t"
            assert r.primary_key == ("id",)
            assert r.auto_increment is True

    def test_untagged_records(self, session, recording_executor):
        recording_executor.add_row(id=1)
        (record,) = session.select("SELECT id FROM t")
        assert record.table_name == ""
        assert record.primary_key == ()

    def test_each_select_returns_fresh_records(self, session, recording_executor):
        recording_executor.add_row(id=1)
        first = session.select("SELECT id FROM t")[0]
        first.set("id", 99)
        second = session.select("SELECT id FROM t")[0]
        assert second is not first
        assert second.int64("id") == 1

    def test_null_column_reads_as_null_value(self, session, recording_executor):
        recording_executor.add_row(nickname=None)
        (record,) = session.select("SELECT nickname FROM t")
        with pytest.raises(NullValueError):
            record.string("nickname")

    def test_duplicate_column_names_last_wins(self, session, recording_executor):
        recording_executor.rows.append(ResultRow(("id", "id"), (1, 2)))
        (record,) = session.select("SELECT a.id, b.id FROM a JOIN b")
        assert record.fields() == ["id"]
        assert record.int64("id") == 2

    def test_empty_result(self, session):
        assert session.select("SELECT id FROM t WHERE 0") == []

    def test_executor_errors_propagate(self, session, recording_executor):
        class Boom(Exception):
            pass

        def failing_query(sql, args=()):
            raise Boom("syntax error")

        recording_executor.query = failing_query
        with pytest.raises(Boom, match="syntax error"):
            session.select("SELEC nonsense")

    def test_new_record(self, session):
        record = session.new_record(Table("t"), PrimaryKey("id"))
        assert isinstance(record, Record)
        assert record.table_name == "t"
        assert record.fields() == []


class TestCreate:
    def test_insert_statement(self, session, recording_executor):
        record = Record("t")
        record.set("name", "x")
        record.set("age", 3)
        session.create(record)
        assert recording_executor.executions == [
            ("INSERT INTO t (name, age) VALUES (?, ?)", ("x", "3"))
        ]

    def test_table_not_set(self, session, recording_executor):
        record = Record()
        record.set("name", "x")
        with pytest.raises(TableNotSetError):
            session.create(record)
        assert recording_executor.executions == []

    def test_captures_generated_id(self, session, recording_executor):
        recording_executor.result = ExecResult(rows_affected=1, last_insert_id=42)
        record = Record.from_options(Table("t"), PrimaryKey("id"), AutoIncrement())
        record.set("name", "x")
        session.create(record)
        assert record.int64("id") == 42

    def test_no_capture_without_auto_increment(self, session, recording_executor):
        recording_executor.result = ExecResult(rows_affected=1, last_insert_id=42)
        record = Record("t", ["id"])
        record.set("name", "x")
        session.create(record)
        assert "id" not in record

    def test_no_capture_for_composite_key(self, session, recording_executor):
        recording_executor.result = ExecResult(rows_affected=1, last_insert_id=42)
        record = Record("t", ["id", "tenant"], auto_increment=True)
        record.set("tenant", "acme")
        session.create(record)
        assert "id" not in record
        assert record.fields() == ["tenant"]

    def test_missing_generated_id_is_soft_failure(self, session, recording_executor):
        recording_executor.result = ExecResult(rows_affected=1, last_insert_id=None)
        record = Record("t", ["id"], auto_increment=True)
        record.set("name", "x")
        with capture_logs() as logs:
            result = session.create(record)
        assert result.rows_affected == 1
        assert "id" not in record
        assert any(e["event"] == "last_insert_id_unavailable" for e in logs)

    def test_record_created_event_reports_generated_id(self, session, recording_executor):
        recording_executor.result = ExecResult(rows_affected=1, last_insert_id=11)
        record = Record("t", ["id"], auto_increment=True)
        record.set("name", "x")
        with capture_logs() as logs:
            result = session.create(record)
        assert result is recording_executor.result
        created = [e for e in logs if e["event"] == "record_created"]
        assert created[0]["last_insert_id"] == 11

    def test_overwrites_explicit_key_with_generated_id(self, session, recording_executor):
        recording_executor.result = ExecResult(rows_affected=1, last_insert_id=7)
        record = Record("t", ["id"], auto_increment=True)
        record.set("id", 0)
        session.create(record)
        assert record.int64("id") == 7


class TestSave:
    def test_update_statement(self, session, recording_executor):
        record = Record("t", ["id"])
        record.set("id", 5)
        record.set("name", "renamed")
        session.save(record)
        assert recording_executor.executions == [
            ("UPDATE t SET id=?, name=? WHERE id=? LIMIT 1", ("5", "renamed", "5"))
        ]

    def test_primary_key_not_set(self, session, recording_executor):
        record = Record("t")
        record.set("id", 1)
        with pytest.raises(PrimaryKeyNotSetError):
            session.save(record)
        assert recording_executor.executions == []

    def test_table_not_set(self, session, recording_executor):
        record = Record("", ["id"])
        record.set("id", 1)
        with pytest.raises(TableNotSetError):
            session.save(record)

    def test_missing_composite_key_value_has_no_side_effects(self, session, recording_executor):
        record = Record("t", ["id", "tenant"])
        record.set("id", 1)
        record.set("name", "x")
        with pytest.raises(PrimaryKeyInvalidError):
            session.save(record)
        assert recording_executor.executions == []

    def test_returns_exec_result(self, session, recording_executor):
        recording_executor.result = ExecResult(rows_affected=1)
        record = Record("t", ["id"])
        record.set("id", 1)
        assert session.save(record).rows_affected == 1

    def test_zero_rows_is_reported_not_raised(self, session, recording_executor):
        recording_executor.result = ExecResult(rows_affected=0)
        record = Record("t", ["id"])
        record.set("id", 404)
        with capture_logs() as logs:
            result = session.save(record)
        assert result.rows_affected == 0
        warnings = [e for e in logs if e["event"] == "no_rows_affected"]
        assert warnings and warnings[0]["log_level"] == "warning"
        assert warnings[0]["operation"] == "save"

    def test_mysql_dialect(self, recording_executor):
        s = Session(recording_executor, dialect="mysql")
        record = Record("t", ["id"])
        record.set("id", 1)
        s.save(record)
        assert recording_executor.executions[0][0] == (
            "UPDATE `t` SET `id`=%s WHERE `id`=%s LIMIT 1"
        )


class TestDelete:
    def test_end_to_end_delete(self, session, recording_executor):
        record = Record.from_options(PrimaryKey("id"), Table("t"))
        record.set("id", 5)
        session.delete(record)
        assert recording_executor.executions == [("DELETE FROM t WHERE id=? LIMIT 1", ("5",))]

    def test_composite_key(self, session, recording_executor):
        record = Record("t", ["id", "tenant"])
        record.set("tenant", "acme")
        record.set("id", 1)
        session.delete(record)
        assert recording_executor.executions == [
            ("DELETE FROM t WHERE id=? AND tenant=? LIMIT 1", ("1", "acme"))
        ]

    def test_missing_key_value(self, session, recording_executor):
        record = Record("t", ["id", "tenant"])
        record.set("id", 1)
        with pytest.raises(PrimaryKeyInvalidError):
            session.delete(record)
        assert recording_executor.executions == []

    def test_primary_key_not_set(self, session):
        record = Record("t")
        record.set("id", 1)
        with pytest.raises(PrimaryKeyNotSetError):
            session.delete(record)


class TestStatementLogging:
    def test_sql_logged_when_enabled(self, recording_executor):
        s = Session(recording_executor, settings=QuickSQLSettings(log_statements=True))
        record = Record("t", ["id"])
        record.set("id", "secret-value")
        with capture_logs() as logs:
            s.delete(record)
        statements = [e for e in logs if e["event"] == "statement"]
        assert statements[0]["sql"] == "DELETE FROM t WHERE id=? LIMIT 1"
        assert "secret-value" not in repr(statements)

    def test_sql_not_logged_by_default(self, session, recording_executor):
        record = Record("t", ["id"])
        record.set("id", 1)
        with capture_logs() as logs:
            session.delete(record)
        assert not [e for e in logs if e["event"] == "statement"]
