"""Database schema for the collection store."""

SCHEMA_VERSION = 1

_SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS schema_version (
        version INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS collections (
        key         TEXT PRIMARY KEY,
        payload     TEXT NOT NULL DEFAULT '[]',
        updated_at  TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
]


def _get_schema_version(conn) -> int:
    """Return the stored schema version, or 0 for a fresh database."""
    row = conn.execute(
        "SELECT name FROM sqlite_master "
        "WHERE type = 'table' AND name = 'schema_version'"
    ).fetchone()
    if not row:
        return 0
    row = conn.execute("SELECT MAX(version) AS v FROM schema_version").fetchone()
    return row["v"] or 0


def initialize_database(db_connection):
    """Create the collection table on a fresh database.

    Collections themselves are not seeded here; the repository falls
    back to the default dataset for any key that has never been saved.
    """
    with db_connection.get_connection() as conn:
        version = _get_schema_version(conn)
        if version < SCHEMA_VERSION:
            for stmt in _SCHEMA_STATEMENTS:
                conn.execute(stmt)
            conn.execute(
                "INSERT INTO schema_version (version) VALUES (?)",
                (SCHEMA_VERSION,),
            )
