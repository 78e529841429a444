"""
Schedule store using PostgreSQL with asyncpg.
Handles all tariff rule persistence and migrations in one place.

The application owns one DatabaseService (created in the lifespan handler)
and injects it into request handlers; every operation acquires its own
connection from the pool.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

import asyncpg

from peak_status.config import settings
from peak_status.exceptions import DatabaseError
from peak_status.logging_config import get_logger
from peak_status.models.schedule import Provider, ScheduleRule

logger = get_logger(__name__)

CURRENT_SCHEMA_VERSION = 1


class DatabaseService:
    """Schedule store for provider tariff rules."""

    def __init__(self, database_url: str = None):
        self.database_url = database_url or settings.database_url
        self._pool = None

    async def _get_pool(self) -> asyncpg.Pool:
        """Get or create connection pool."""
        if self._pool is None or self._pool.is_closing():
            self._pool = await asyncpg.create_pool(
                self.database_url,
                min_size=1,
                max_size=10,
                command_timeout=60
            )
        return self._pool

    async def close(self):
        """Close database connection pool."""
        if self._pool and not self._pool.is_closing():
            await self._pool.close()

    async def init_database(self) -> None:
        """Initialize database with tables, indexes, and migrations."""
        try:
            pool = await self._get_pool()
            async with pool.acquire() as conn:
                current_version = await self._get_schema_version(conn)

                if current_version == 0:
                    await self._create_initial_schema(conn)
                    await self._set_schema_version(conn, CURRENT_SCHEMA_VERSION)
                    logger.info("Database initialized with schema version", version=CURRENT_SCHEMA_VERSION)

        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise DatabaseError(f"Database initialization failed: {e}")

    async def _get_schema_version(self, conn: asyncpg.Connection) -> int:
        """Get current database schema version."""
        try:
            result = await conn.fetchval(
                "SELECT version FROM schema_version ORDER BY version DESC LIMIT 1"
            )
            return result if result else 0
        except asyncpg.UndefinedTableError:
            # Table doesn't exist, this is a new database
            return 0

    async def _set_schema_version(self, conn: asyncpg.Connection, version: int) -> None:
        """Set database schema version."""
        await conn.execute(
            "INSERT INTO schema_version (version, applied_at) VALUES ($1, $2)",
            version, datetime.now()
        )

    async def _create_initial_schema(self, conn: asyncpg.Connection) -> None:
        """Create initial database schema."""
        await conn.execute("""
            CREATE TABLE schema_version (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Times stay as HH:MM text; validation happens on ingestion
        await conn.execute("""
            CREATE TABLE peak_schedules (
                id SERIAL PRIMARY KEY,
                provider VARCHAR(8) NOT NULL CHECK (provider IN ('MEA', 'PEA')),
                day_of_week SMALLINT CHECK (day_of_week BETWEEN 0 AND 6),
                specific_date DATE,
                start_time VARCHAR(5) NOT NULL,
                end_time VARCHAR(5) NOT NULL,
                is_peak BOOLEAN NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                CHECK ((day_of_week IS NULL) <> (specific_date IS NULL))
            )
        """)

        await conn.execute(
            "CREATE INDEX idx_peak_schedules_provider ON peak_schedules(provider)"
        )
        await conn.execute(
            "CREATE INDEX idx_peak_schedules_specific_date ON peak_schedules(specific_date)"
        )

        logger.info("Initial database schema created")

    async def get_rules_for_provider(self, provider: Provider) -> List[Dict[str, Any]]:
        """
        Fetch all raw rule records of a provider in insertion order.
        Records use the ingestion field names and are validated by the caller.
        """
        try:
            pool = await self._get_pool()
            async with pool.acquire() as conn:
                rows = await conn.fetch("""
                    SELECT id, provider, day_of_week, specific_date, start_time, end_time, is_peak
                    FROM peak_schedules
                    WHERE provider = $1
                    ORDER BY id ASC
                """, provider.value)

                return [_row_to_record(row) for row in rows]

        except Exception as e:
            logger.error("Failed to get schedule rules", error=str(e), provider=provider.value)
            raise DatabaseError(f"Query failed: {e}")

    async def save_rules(self, rules: List[ScheduleRule]) -> int:
        """Insert schedule rules, returning the number saved."""
        if not rules:
            return 0

        try:
            pool = await self._get_pool()
            async with pool.acquire() as conn:
                records_data = [
                    (
                        rule.provider.value,
                        rule.day_of_week,
                        rule.specific_date,
                        rule.start_time.strftime("%H:%M"),
                        rule.end_time.strftime("%H:%M"),
                        rule.is_peak,
                    )
                    for rule in rules
                ]

                await conn.executemany("""
                    INSERT INTO peak_schedules
                    (provider, day_of_week, specific_date, start_time, end_time, is_peak)
                    VALUES ($1, $2, $3, $4, $5, $6)
                """, records_data)

                logger.info("Saved schedule rules", count=len(rules))
                return len(rules)

        except Exception as e:
            logger.error("Failed to save schedule rules", error=str(e))
            raise DatabaseError(f"Failed to save rules: {e}")

    async def delete_rules_for_provider(self, provider: Optional[Provider] = None) -> int:
        """Remove the rules of a provider, or of all providers when none is given."""
        try:
            pool = await self._get_pool()
            async with pool.acquire() as conn:
                if provider is None:
                    result = await conn.execute("DELETE FROM peak_schedules")
                else:
                    result = await conn.execute(
                        "DELETE FROM peak_schedules WHERE provider = $1",
                        provider.value
                    )

                # Extract number from result string like "DELETE 42"
                deleted_count = int(result.split()[-1]) if result.split()[-1].isdigit() else 0

                if deleted_count > 0:
                    logger.info(
                        "Deleted schedule rules",
                        deleted_count=deleted_count,
                        provider=provider.value if provider else "ALL"
                    )

                return deleted_count

        except Exception as e:
            logger.error("Failed to delete schedule rules", error=str(e))
            raise DatabaseError(f"Delete failed: {e}")

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            pool = await self._get_pool()
            async with pool.acquire() as conn:
                result = await conn.fetchval(
                    "SELECT COUNT(*) FROM information_schema.tables WHERE table_name = 'peak_schedules'"
                )

                if result != 1:
                    logger.error("Peak schedules table not found")
                    return False

            return True

        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return False


def _row_to_record(row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "provider": row["provider"],
        "dayOfWeek": row["day_of_week"],
        "specificDate": row["specific_date"],
        "startTime": row["start_time"],
        "endTime": row["end_time"],
        "isPeak": row["is_peak"],
    }
