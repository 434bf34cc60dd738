import os
from pathlib import Path
from typing import Callable
from urllib.parse import urlparse

from psycopg import Connection, connect
from psycopg.rows import dict_row

SCHEMA_PATH = Path(__file__).resolve().parent.parent / "data" / "schema.sql"

# connect to postgres DB
def get_connection():
    database_url = os.getenv("DATABASE_URL", "").strip()
    if not database_url:
        raise RuntimeError("DATABASE_URL is required")
    conn = connect(database_url, row_factory=dict_row)
    return conn

# refuse to let the test suite truncate anything that is not a throwaway database
def assert_test_database_safety() -> None:
    if os.getenv("APP_ENV", "").strip().lower() != "test":
        raise RuntimeError("APP_ENV must be 'test' before touching the test database")
    database_url = os.getenv("DATABASE_URL", "").strip()
    db_name = urlparse(database_url).path.lstrip("/")
    if "_test_" not in db_name:
        raise RuntimeError(f"refusing to use non-test database: {db_name or '<empty>'}")

# test table presence before altering
def _table_exists(conn: Connection, table_name: str) -> bool:
    row = conn.execute(
        """
        SELECT 1
        FROM information_schema.tables
        WHERE table_schema = 'public'
          AND table_name = %s
        LIMIT 1
        """,
        (table_name,),
    ).fetchone()
    return row is not None

# prevents second startup after migration from causing duplicate column errors
def _column_exists(conn: Connection, table_name: str, column_name: str) -> bool:
    if not _table_exists(conn, table_name):
        return False
    row = conn.execute(
        """
        SELECT 1
        FROM information_schema.columns
        WHERE table_schema = 'public'
          AND table_name = %s
          AND column_name = %s
        LIMIT 1
        """,
        (table_name, column_name),
    ).fetchone()
    return row is not None

# timeline reads are always newest first
def _migration_001_seizures_date_index(conn: Connection) -> None:
    conn.execute(
        """
        CREATE INDEX IF NOT EXISTS idx_seizures_date_time
        ON seizures(date_time DESC)
        """
    )

# whether a row came from manual entry or an import
def _migration_002_seizures_import_source(conn: Connection) -> None:
    if not _column_exists(conn, "seizures", "source"):
        conn.execute("ALTER TABLE seizures ADD COLUMN source TEXT NOT NULL DEFAULT 'manual'")


def _apply_migrations(conn: Connection) -> None:
    migrations: list[Callable[[Connection], None]] = [
        _migration_001_seizures_date_index,
        _migration_002_seizures_import_source,
    ]
    for migration in migrations:
        migration(conn)


def _execute_script(conn: Connection, script: str) -> None:
    with conn.cursor() as cursor:
        cursor.execute(script)


def initialize_database():
    conn = get_connection()
    try:
        if not _table_exists(conn, "seizures"):
            with open(SCHEMA_PATH, "r") as f:
                schema_sql = f.read()
            _execute_script(conn, schema_sql)
        _apply_migrations(conn)
        conn.commit()
    finally:
        conn.close()
