#!/usr/bin/env python3
"""
Development helper scripts for the Peak Status API.
Provides utilities for database setup, seeding and manual status checks.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from peak_status.config import settings
from peak_status.database.seed import default_schedule_rules
from peak_status.database.service import DatabaseService
from peak_status.logging_config import setup_logging
from peak_status.services.status_service import StatusService


async def init_db():
    """Initialize the database with required tables."""
    print("Initializing database...")
    setup_logging()
    store = DatabaseService()
    try:
        await store.init_database()
    finally:
        await store.close()
    print("Database initialized")


async def seed_schedules():
    """Replace all schedule rules with the default rule set."""
    print("Seeding default schedule rules...")
    setup_logging()
    store = DatabaseService()
    try:
        await store.init_database()
        deleted = await store.delete_rules_for_provider()
        saved = await store.save_rules(default_schedule_rules())
    finally:
        await store.close()
    print(f"Removed {deleted} old rules, seeded {saved} rules")


async def show_schedules(provider: str):
    """Display the schedule rules of a provider."""
    setup_logging()
    store = DatabaseService()
    try:
        rules = await StatusService(store).get_schedules(provider)
    finally:
        await store.close()

    if not rules:
        print(f"No schedule rules found for {provider}")
        return

    print(f"\nFound {len(rules)} schedule rules for {provider}:")
    print("-" * 60)
    print(f"{'Applies to':<16} {'Start':<8} {'End':<8} {'Period':<10}")
    print("-" * 60)

    for rule in rules:
        applies_to = rule.specific_date.isoformat() if rule.specific_date else f"weekday {rule.day_of_week}"
        period = "ON_PEAK" if rule.is_peak else "OFF_PEAK"
        print(f"{applies_to:<16} {rule.start_time.strftime('%H:%M'):<8} "
              f"{rule.end_time.strftime('%H:%M'):<8} {period:<10}")


async def show_status(provider: str):
    """Resolve and display the current peak status of a provider."""
    setup_logging()
    store = DatabaseService()
    try:
        status = await StatusService(store).get_status(provider)
    finally:
        await store.close()

    print(f"Provider: {status.provider.value}")
    print(f"Currently: {'ON_PEAK' if status.is_peak else 'OFF_PEAK'}")
    if status.time_to_next_change < 0:
        print("Next change: unknown within lookahead horizon")
    else:
        hours, remainder = divmod(status.time_to_next_change, 3600)
        minutes, seconds = divmod(remainder, 60)
        print(f"Next change: {status.next_period.value} in {hours:02d}:{minutes:02d}:{seconds:02d} "
              f"(at {status.next_change_at.isoformat()})")


def show_config():
    """Display current configuration settings."""
    print("Current Configuration:")
    print("-" * 40)
    print(f"API Host: {settings.api_host}")
    print(f"API Port: {settings.api_port}")
    print(f"Debug Mode: {settings.api_debug}")
    print(f"Tariff Timezone: {settings.tariff_timezone}")
    print(f"Lookahead Days: {settings.lookahead_days}")
    print(f"Default Provider: {settings.default_provider or 'not set'}")
    print(f"Log Level: {settings.log_level}")


def main():
    """Main script entry point with command selection."""
    if len(sys.argv) < 2:
        print("Peak Status API Development Scripts")
        print("Usage: python scripts/dev.py <command> [provider]")
        print("\nAvailable commands:")
        print("  init-db                   - Initialize database")
        print("  seed                      - Replace rules with the default rule set")
        print("  show-schedules <provider> - Display schedule rules of a provider")
        print("  status <provider>         - Display the current peak status")
        print("  show-config               - Display current configuration")
        return

    command = sys.argv[1]
    provider = sys.argv[2] if len(sys.argv) > 2 else settings.default_provider

    if command == "init-db":
        asyncio.run(init_db())
    elif command == "seed":
        asyncio.run(seed_schedules())
    elif command == "show-schedules":
        asyncio.run(show_schedules(provider))
    elif command == "status":
        asyncio.run(show_status(provider))
    elif command == "show-config":
        show_config()
    else:
        print(f"Unknown command: {command}")
        print("Run without arguments to see available commands")


if __name__ == "__main__":
    main()
