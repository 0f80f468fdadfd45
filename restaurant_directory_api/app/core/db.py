"""
SQLite storage for the restaurant table and a simple migration system.

This module provides functions for resolving the database file
(``get_database_path``), obtaining a connection (``get_connection``)
and applying migrations on application start (``init_db``).  The
restaurant table (``restaurants`` unless ``TABLE_NAME`` says
otherwise) uses the restaurant name as its primary key and carries
three secondary indexes, by cuisine, by region and by region+cuisine.
Every index ends with ``rating`` so that ranked queries can walk an
index in descending rating order.

The table name is interpolated into SQL, so it must be a plain
identifier (``check_table_name``).  The migration mechanism records
the versions applied to each table in the ``migrations`` table and
executes new migrations in order.
"""

import os
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple


DEFAULT_TABLE_NAME = "restaurants"

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Each statement is formatted with ``table`` before it runs.
MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: restaurant table keyed by name
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS {table} (
            name TEXT PRIMARY KEY,
            cuisine TEXT NOT NULL,
            region TEXT NOT NULL,
            rating REAL NOT NULL DEFAULT 0,
            rating_count INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: secondary indexes used by the top-rated queries
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_{table}_cuisine_rating
            ON {table}(cuisine, rating);
        CREATE INDEX IF NOT EXISTS idx_{table}_region_rating
            ON {table}(region, rating);
        CREATE INDEX IF NOT EXISTS idx_{table}_region_cuisine_rating
            ON {table}(region, cuisine, rating);
        """,
    ),
]


def check_table_name(table_name: str) -> str:
    """Return ``table_name`` if it is a plain SQL identifier, else raise ``ValueError``."""
    if not isinstance(table_name, str) or not _IDENTIFIER.match(table_name):
        raise ValueError(f"Invalid table name: {table_name!r}")
    if table_name.lower() == "migrations" or table_name.lower().startswith("sqlite_"):
        raise ValueError(f"Table name {table_name!r} is reserved")
    return table_name


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    If ``database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def get_connection(database_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.
    """
    conn = sqlite3.connect(database_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(database_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit.

    The transaction is committed when the block exits normally and
    rolled back when it raises.
    """
    conn = get_connection(database_path)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(database_path: str, table_name: str = DEFAULT_TABLE_NAME) -> int:
    """Initialise the database and apply pending migrations for ``table_name``.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version of the restaurant table, and applies any new
    migrations defined in ``MIGRATIONS``.  Returns the schema version
    after migrating.
    """
    table = check_table_name(table_name)
    with get_cursor(database_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations ("
            "table_name TEXT NOT NULL, version INTEGER NOT NULL, "
            "PRIMARY KEY (table_name, version))"
        )
        cursor.execute(
            "SELECT MAX(version) as version FROM migrations WHERE table_name = ?",
            (table,),
        )
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql.format(table=table))
                cursor.execute(
                    "INSERT INTO migrations (table_name, version) VALUES (?, ?)",
                    (table, version),
                )
                current_version = version
    return current_version
