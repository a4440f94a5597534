"""
Database schema management.

Applies the SQL files in ``migrations/`` in name order and records each
one in ``schema_migrations``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pg_async import AsyncPostgresDB

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def get_migration_files() -> list[Path]:
    """Get all SQL migration files in order."""
    if not MIGRATIONS_DIR.exists():
        return []

    return sorted(MIGRATIONS_DIR.glob("*.sql"))


async def _is_applied(db: "AsyncPostgresDB", name: str) -> bool:
    exists = await db.fetchone("SELECT to_regclass('schema_migrations') IS NOT NULL AS exists")
    if not exists or not exists["exists"]:
        return False
    row = await db.fetchone("SELECT 1 AS applied FROM schema_migrations WHERE name = %s", (name,))
    return row is not None


async def run_migrations(db: "AsyncPostgresDB", force: bool = False) -> int:
    """
    Run all pending migrations.

    Args:
        db: Database connection
        force: If True, run all migrations even if already applied

    Returns:
        Number of migrations applied
    """
    migration_files = get_migration_files()
    if not migration_files:
        logger.warning("No migration files found in %s", MIGRATIONS_DIR)
        return 0

    applied = 0

    for migration_file in migration_files:
        name = migration_file.stem

        if not force and await _is_applied(db, name):
            logger.debug("Skipping already applied migration: %s", name)
            continue

        logger.info("Applying migration: %s", name)
        await db.executescript(migration_file.read_text())
        await db.execute(
            """
            INSERT INTO schema_migrations (name) VALUES (%s)
            ON CONFLICT (name) DO UPDATE SET applied_at = NOW()
            """,
            (name,),
        )
        applied += 1

    logger.info("Applied %d migration(s)", applied)
    return applied
