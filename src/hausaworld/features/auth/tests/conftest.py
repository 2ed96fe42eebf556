"""Shared fixtures for auth feature tests."""

from typing import Any

import pytest


class InMemoryProfilesDB:
    """
    Query builder stand-in holding rows in memory.

    Implements upsert_record with PostgREST semantics: rows are keyed by the
    conflict columns and a conflicting upsert updates only the given columns.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[tuple, dict[str, Any]]] = {}
        self.upsert_calls: list[dict[str, Any]] = []
        self.error: Exception | None = None

    def upsert_record(
        self,
        table: str,
        record: dict[str, Any],
        conflict_columns: list[str],
        ignore_duplicates: bool = False,
    ) -> dict[str, Any] | None:
        self.upsert_calls.append(
            {
                "table": table,
                "record": dict(record),
                "conflict_columns": conflict_columns,
                "ignore_duplicates": ignore_duplicates,
            }
        )
        if self.error:
            raise self.error

        rows = self.tables.setdefault(table, {})
        key = tuple(record[column] for column in conflict_columns)
        if key in rows:
            if ignore_duplicates:
                return None
            rows[key].update(record)
        else:
            rows[key] = dict(record)
        return dict(rows[key])

    def rows(self, table: str) -> list[dict[str, Any]]:
        return list(self.tables.get(table, {}).values())


@pytest.fixture
def profiles_db() -> InMemoryProfilesDB:
    """Provide an empty in-memory profiles database."""
    return InMemoryProfilesDB()
