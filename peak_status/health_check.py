"""
Health check module for Docker health checks and monitoring.
Verifies schedule store connectivity and basic service functionality.
"""

import asyncio
import sys

from peak_status.config import settings
from peak_status.database.service import DatabaseService
from peak_status.logging_config import get_logger, setup_logging
from peak_status.utils.time_utils import get_operating_timezone

logger = get_logger(__name__)


async def health_check(store: DatabaseService) -> bool:
    """
    Perform comprehensive health check of the service.
    """
    try:
        get_operating_timezone(settings.tariff_timezone)
        return await store.health_check()

    except Exception as e:
        logger.error("Health check failed", error=str(e))
        return False


async def main():
    """
    Main health check entry point for command line usage.
    """
    setup_logging()
    store = DatabaseService(settings.database_url)
    try:
        is_healthy = await health_check(store)
    finally:
        await store.close()

    if is_healthy:
        logger.info("Health check passed")
        sys.exit(0)
    else:
        logger.error("Health check failed")
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
