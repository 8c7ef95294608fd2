"""
Shared pytest fixtures and configuration for quicksql tests.

This module provides:
- A recording executor double that captures every statement it receives
- An in-memory SQLite database seeded with one row of mixed column types
- Auto-marking of tests as unit/integration by location and fixture use

Usage:
    Fixtures are auto-discovered by pytest; request them by name:

    def test_delete(recording_executor):
        ...
"""

from __future__ import annotations

import sqlite3
import sys
from collections.abc import Generator, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

# Ensure quicksql package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from quicksql.protocols import ExecResult, ResultRow


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests using a real database as integration, everything else as unit."""
    for item in items:
        fixtures = set(getattr(item, "fixturenames", ()))
        markers = {mark.name for mark in item.iter_markers()}
        if markers.intersection({"unit", "integration"}):
            continue
        if fixtures.intersection({"sqlite_conn", "sa_connection"}):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Executor Double
# =============================================================================


@dataclass
class RecordingExecutor:
    """Executor double: returns canned rows/results and records every call.

    ``queries`` and ``executions`` hold ``(sql, args)`` tuples in call order.
    """

    rows: list[ResultRow] = field(default_factory=list)
    result: ExecResult = field(default_factory=lambda: ExecResult(rows_affected=1))
    queries: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    executions: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    def query(self, sql: str, args: Sequence[Any] = ()) -> list[ResultRow]:
        self.queries.append((sql, tuple(args)))
        return list(self.rows)

    def execute(self, sql: str, args: Sequence[Any] = ()) -> ExecResult:
        self.executions.append((sql, tuple(args)))
        return self.result

    def add_row(self, **columns: Any) -> None:
        self.rows.append(ResultRow(tuple(columns), tuple(columns.values())))


@pytest.fixture
def recording_executor() -> RecordingExecutor:
    return RecordingExecutor()


# =============================================================================
# SQLite Fixtures
# =============================================================================

CREATE_TEST_TABLE = """
    CREATE TABLE test_table (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        field_string VARCHAR(255) NOT NULL,
        field_string_nullable VARCHAR(255),
        field_integer INTEGER NOT NULL,
        field_integer_nullable INTEGER,
        field_binary BLOB,
        field_datetime TEXT,
        field_decimal REAL NOT NULL
    )
"""

SEED_ROW = {
    "field_string": "field_string",
    "field_string_nullable": None,
    "field_integer": 666,
    "field_integer_nullable": None,
    "field_binary": b"binary",
    "field_datetime": "2020-03-04 15:30:44",
    "field_decimal": 555.66,
}


def seed(conn: Any) -> None:
    """Create ``test_table`` and insert :data:`SEED_ROW` on a DB-API connection."""
    conn.execute(CREATE_TEST_TABLE)
    columns = ", ".join(SEED_ROW)
    placeholders = ", ".join("?" for _ in SEED_ROW)
    conn.execute(
        f"INSERT INTO test_table ({columns}) VALUES ({placeholders})",
        tuple(SEED_ROW.values()),
    )
    conn.commit()


@pytest.fixture
def sqlite_conn() -> Generator[sqlite3.Connection, None, None]:
    """In-memory SQLite connection holding one seeded row in ``test_table``."""
    conn = sqlite3.connect(":memory:")
    seed(conn)
    yield conn
    conn.close()
