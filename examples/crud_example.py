#!/usr/bin/env python3
"""sqltpl CRUD Example.

This example demonstrates the basic usage of sqltpl:
- Typed placeholders (?, ?d, ?f, ?a, ?#)
- Conditional blocks removed with the skip marker
- Dialect-aware escaping bound to a DB-API connection

Usage:
    uv run python examples/crud_example.py
"""

from __future__ import annotations

import sqlite3
from typing import Any

from sqltpl import Database, Dialect, build_query, skip

# =============================================================================
# Database Setup
# =============================================================================


def setup_database() -> sqlite3.Connection:
    """Set up SQLite database for testing."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row  # Enable dict-like access

    conn.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            department TEXT,
            score REAL,
            active INTEGER NOT NULL DEFAULT 1
        )
    """)

    sample_data = [
        ("Tanaka Taro", "Sales", 72.5, 1),
        ("Suzuki Hanako", "Development", 88.0, 1),
        ("Sato Ichiro", "Sales", 64.25, 0),
        ("Yamada Misaki", "Development", 91.5, 1),
        ("O'Brien Sean", "Support", 80.0, 1),
    ]
    conn.executemany(
        "INSERT INTO users (name, department, score, active) VALUES (?, ?, ?, ?)",
        sample_data,
    )
    conn.commit()
    return conn


def run(conn: sqlite3.Connection, sql: str) -> list[dict[str, Any]]:
    """Execute SQL and return rows as dicts."""
    print(f"SQL: {sql}")
    cursor = conn.execute(sql)
    rows = [dict(row) for row in cursor.fetchall()]
    for row in rows:
        print(f"  {row}")
    print()
    return rows


# =============================================================================
# CRUD Operations
# =============================================================================


def demo_typed_placeholders(conn: sqlite3.Connection, db: Database) -> None:
    """Demo: ?d / ?f / ?a / ?# placeholders."""
    print("=" * 60)
    print("[TYPED PLACEHOLDERS]")
    print("=" * 60)

    sql = db.build_query(
        "SELECT ?# FROM users WHERE id IN (?a) AND score >= ?f ORDER BY id LIMIT ?d",
        [["id", "name"], [1, 2, 4], "70.0", "10 rows"],
    )
    run(conn, sql)


def demo_conditional_block(conn: sqlite3.Connection, db: Database) -> None:
    """Demo: Conditional blocks.

    A block containing a placeholder is removed when the skip marker is passed.
    """
    print("=" * 60)
    print("[CONDITIONAL BLOCK] With and without department filter")
    print("=" * 60)

    template = "SELECT id, name FROM users WHERE active = ?d {AND department = '?'} ORDER BY id"
    run(conn, db.build_query(template, [True, "Sales"]))
    run(conn, db.build_query(template, [True, db.skip()]))


def demo_escape(conn: sqlite3.Connection, db: Database) -> None:
    """Demo: String escaping follows the connection's dialect."""
    print("=" * 60)
    print(f"[ESCAPE] Dialect: {db.dialect}")
    print("=" * 60)

    run(conn, db.build_query("SELECT id, name FROM users WHERE name = '?'", ["O'Brien Sean"]))


def demo_insert(conn: sqlite3.Connection, db: Database) -> None:
    """Demo: INSERT with NULL and boolean values."""
    print("=" * 60)
    print("[INSERT] Register new user")
    print("=" * 60)

    sql = db.build_query(
        "INSERT INTO users (name, department, score, active) VALUES ('?', ?, ?f, ?)",
        ["New User", None, 55, False],
    )
    print(f"SQL: {sql}")
    cursor = conn.execute(sql)
    conn.commit()
    print(f"Inserted ID: {cursor.lastrowid}")
    print()


def demo_update(conn: sqlite3.Connection, db: Database) -> None:
    """Demo: UPDATE with an optional clause."""
    print("=" * 60)
    print("[UPDATE] Update user information")
    print("=" * 60)

    sql = db.build_query(
        "UPDATE users SET name = '?'{, department = '?'} WHERE id = ?d",
        ["Tanaka Taro (Updated)", skip(), 1],
    )
    print(f"SQL: {sql}")
    conn.execute(sql)
    conn.commit()
    run(conn, "SELECT * FROM users WHERE id = 1")


def demo_delete(conn: sqlite3.Connection) -> None:
    """Demo: DELETE using the functional API."""
    print("=" * 60)
    print("[DELETE] Delete user")
    print("=" * 60)

    sql = build_query("DELETE FROM users WHERE id = ?d", [6], dialect=Dialect.SQLITE)
    print(f"SQL: {sql}")
    cursor = conn.execute(sql)
    conn.commit()
    print(f"Deleted rows: {cursor.rowcount}")
    print()


# =============================================================================
# Main
# =============================================================================


def main() -> None:
    """Run the examples."""
    print("sqltpl CRUD Example")
    print("=" * 60)
    print()

    conn = setup_database()
    db = Database(conn)

    demo_typed_placeholders(conn, db)
    demo_conditional_block(conn, db)
    demo_escape(conn, db)
    demo_insert(conn, db)
    demo_update(conn, db)
    demo_delete(conn)

    print("=" * 60)
    print("Example completed")
    print("=" * 60)


if __name__ == "__main__":
    main()
