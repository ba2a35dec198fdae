"""Shared fixtures: an in-memory stand-in for the Supabase query builder"""
from unittest.mock import Mock

import pytest


class FakeQuery:
    """Records eq/in_ filters and applies them to canned rows on execute()"""

    def __init__(self, rows, error=None):
        self.rows = rows
        self.error = error
        self.filters = []
        self.is_single = False
        self.limit_n = None

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        self.filters.append((column, lambda v, expected=value: v == expected))
        return self

    def in_(self, column, values):
        self.filters.append((column, lambda v, allowed=tuple(values): v in allowed))
        return self

    def order(self, *args, **kwargs):
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    def single(self):
        self.is_single = True
        return self

    def execute(self):
        if self.error is not None:
            raise self.error
        rows = [r for r in self.rows if all(check(r.get(col)) for col, check in self.filters)]
        if self.limit_n is not None:
            rows = rows[:self.limit_n]
        if self.is_single:
            return Mock(data=rows[0] if rows else None)
        return Mock(data=rows)


class FakeSupabase:
    def __init__(self, tables, error=None):
        self.tables = tables
        self.error = error
        self.requested = []

    def table(self, name):
        self.requested.append(name)
        return FakeQuery(self.tables.get(name, []), self.error)


@pytest.fixture
def make_supabase():
    """Factory: make_supabase({table_name: rows}, error=None)"""
    return FakeSupabase
