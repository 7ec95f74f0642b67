"""Snapshot the store into the backup directory and prune old snapshots.

Uses SQLite's online backup so a snapshot taken while the app is writing
is still consistent.

Run:
    python execution/db_backup.py          # take a snapshot
    python execution/db_backup.py --list   # show existing snapshots
"""

import logging
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

from gymfix.app import configure_logging
from gymfix.config import Config
from gymfix.database.connection import DatabaseConnection

logger = logging.getLogger(__name__)

KEEP_BACKUPS = 10
BACKUP_PATTERN = "gymfix_*.db"


def list_backups(backup_dir: Path | None = None) -> list[Path]:
    """Snapshots in *backup_dir*, newest first."""
    backup_dir = Path(backup_dir or Config.BACKUP_PATH)
    if not backup_dir.is_dir():
        return []
    return sorted(backup_dir.glob(BACKUP_PATTERN), reverse=True)


def backup_database(db_path: Path | None = None,
                    backup_dir: Path | None = None,
                    keep: int = KEEP_BACKUPS) -> Path | None:
    """Write a snapshot of *db_path* and keep only the newest *keep*.

    Returns the snapshot path, or None when there is no store yet.
    """
    db_path = Path(db_path or Config.DATABASE_PATH)
    backup_dir = Path(backup_dir or Config.BACKUP_PATH)
    if not db_path.exists():
        logger.warning("No database at %s, nothing to back up", db_path)
        return None

    backup_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    target = backup_dir / f"gymfix_{stamp}.db"
    with DatabaseConnection(db_path).get_connection() as conn:
        dest = sqlite3.connect(str(target))
        try:
            conn.backup(dest)
        finally:
            dest.close()
    logger.info("Backup written to %s", target)

    for old in list_backups(backup_dir)[keep:]:
        old.unlink()
        logger.info("Pruned backup %s", old.name)
    return target


def main(argv: list[str]) -> int:
    configure_logging()
    if "--list" in argv:
        for path in list_backups():
            print(path.name)
        return 0
    target = backup_database()
    if target is None:
        print(f"Database not found at {Config.DATABASE_PATH}")
        return 1
    print(f"Backup created: {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
