"""Database（接続に紐付いた QueryBuilder）のテスト."""

from __future__ import annotations

import logging
import sqlite3

import pytest

from sqltpl import ArgumentError, CallableEscaper, Database, Dialect, DialectEscaper, skip


class FakeMySQLConnection:
    """escape_string を持つ接続オブジェクト（pymysql 互換）."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def escape_string(self, value: str) -> str:
        self.calls.append(value)
        return value.replace("'", "\\'")


class TestDialectDetection:
    """接続オブジェクトからの Dialect 自動検出."""

    def test_sqlite3(self) -> None:
        conn = sqlite3.connect(":memory:")
        try:
            db = Database(conn)
            assert db.dialect is Dialect.SQLITE
            assert isinstance(db.escaper, DialectEscaper)
            assert db.escaper.dialect is Dialect.SQLITE
        finally:
            conn.close()

    def test_unknown_connection(self) -> None:
        db = Database(object())
        assert db.dialect is None
        assert isinstance(db.escaper, DialectEscaper)
        assert db.escaper.dialect is Dialect.MYSQL

    def test_unknown_connection_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="sqltpl.database"):
            Database(object())
        assert "falling back to MySQL escaping rules" in caplog.text

    def test_explicit_dialect_does_not_warn(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="sqltpl.database"):
            Database(object(), dialect=Dialect.SQLITE)
        assert caplog.records == []

    def test_postgresql_connection_doubles_quote(self) -> None:
        connection_cls = type("Connection", (), {"__module__": "psycopg.connection"})
        db = Database(connection_cls())
        assert db.build_query("'?'", ["\\' OR 1=1 --"]) == "'\\'' OR 1=1 --'"

    def test_explicit_dialect(self) -> None:
        db = Database(object(), dialect=Dialect.ORACLE)
        assert db.dialect is Dialect.ORACLE
        assert db.build_query("'?'", ["it's"]) == "'it''s'"

    def test_detected_from_module_name(self) -> None:
        connection_cls = type("Connection", (), {"__module__": "psycopg.connection"})
        db = Database(connection_cls())
        assert db.dialect is Dialect.POSTGRESQL


class TestDriverEscaping:
    """接続の escape_string への委譲."""

    def test_escape_string_used(self) -> None:
        conn = FakeMySQLConnection()
        db = Database(conn)
        assert isinstance(db.escaper, CallableEscaper)
        assert db.build_query("name = '?'", ["O'Reilly"]) == "name = 'O\\'Reilly'"
        assert conn.calls == ["O'Reilly"]

    def test_each_list_element_escaped(self) -> None:
        conn = FakeMySQLConnection()
        Database(conn).build_query("IN (?a)", [["a", "b"]])
        assert conn.calls == ["a", "b"]


class TestBuildQuery:
    """Database.build_query."""

    def test_skip_accessor(self) -> None:
        db = Database(object())
        assert db.skip() is skip()

    def test_conditional_block(self) -> None:
        db = Database(object())
        template = "SELECT name FROM users WHERE user_id = ?d {AND block = ?d}"
        assert db.build_query(template, [1, True]) == (
            "SELECT name FROM users WHERE user_id = 1 AND block = 1"
        )
        assert db.build_query(template, [1, db.skip()]) == (
            "SELECT name FROM users WHERE user_id = 1 "
        )

    def test_errors_propagate(self) -> None:
        with pytest.raises(ArgumentError):
            Database(object()).build_query("?")
