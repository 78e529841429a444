"""
Test configuration and fixtures for the Peak Status API tests.
Contains shared fixtures and test utilities.
"""

from datetime import date, datetime
from typing import Any, Dict, List
from unittest.mock import AsyncMock

import pytest
import pytz
from fastapi.testclient import TestClient

from peak_status.api.routes import get_schedule_store
from peak_status.main import create_app

BANGKOK = pytz.timezone("Asia/Bangkok")


def bangkok(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    """Aware datetime for a wall-clock time in Bangkok."""
    return BANGKOK.localize(datetime(year, month, day, hour, minute, second))


def rule_record(
    start_time: str,
    is_peak: bool,
    day_of_week: int = None,
    specific_date: date = None,
    provider: str = "MEA",
    end_time: str = "23:59",
) -> Dict[str, Any]:
    """
    Build a raw rule record in the schedule store's ingestion format.
    """
    return {
        "provider": provider,
        "dayOfWeek": day_of_week,
        "specificDate": specific_date,
        "startTime": start_time,
        "endTime": end_time,
        "isPeak": is_peak,
    }


@pytest.fixture
def step_day_records() -> List[Dict[str, Any]]:
    """
    Monday (weekday 1) rules alternating between off-peak and on-peak.
    """
    return [
        rule_record("00:00", False, day_of_week=1),
        rule_record("06:00", True, day_of_week=1),
        rule_record("10:00", False, day_of_week=1),
        rule_record("17:00", True, day_of_week=1),
        rule_record("21:00", False, day_of_week=1),
    ]


@pytest.fixture
def mock_store():
    """
    Create a mock schedule store for testing.
    """
    store = AsyncMock()
    store.get_rules_for_provider.return_value = []
    store.health_check.return_value = True
    return store


@pytest.fixture
def test_app(mock_store):
    """
    Create a test instance of the FastAPI application backed by the mock store.
    """
    app = create_app()
    app.dependency_overrides[get_schedule_store] = lambda: mock_store
    return app


@pytest.fixture
def test_client(test_app):
    """
    Create a test client for the FastAPI application.
    """
    return TestClient(test_app)
