"""SQLite connection management and the JSON collection store."""

import json
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional


class DatabaseConnection:
    """Manages SQLite connections that commit or roll back as a unit."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self):
        """Yield a connection that auto-commits or rolls back."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def execute(self, sql: str, params: tuple = ()):
        """Run a single statement and return the fetched rows."""
        with self.get_connection() as conn:
            cursor = conn.execute(sql, params)
            return cursor.fetchall()

    # ── Collection snapshots ────────────────────────────────────

    def read_collection(self, key: str) -> Optional[list[dict]]:
        """Return the stored JSON array for *key*, or None if never saved."""
        rows = self.execute(
            "SELECT payload FROM collections WHERE key = ?", (key,)
        )
        if not rows:
            return None
        return json.loads(rows[0]["payload"])

    def write_collections(self, snapshots: dict[str, list[dict]]):
        """Overwrite the whole snapshot of each key in one transaction."""
        with self.get_connection() as conn:
            for key, records in snapshots.items():
                conn.execute("""
                    INSERT INTO collections (key, payload, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        payload = excluded.payload,
                        updated_at = excluded.updated_at
                """, (key, json.dumps(records, ensure_ascii=False)))

    def clear_collections(self):
        """Drop every stored snapshot (factory reset)."""
        with self.get_connection() as conn:
            conn.execute("DELETE FROM collections")
