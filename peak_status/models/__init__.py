"""
Data models package for the Peak Status API.
Contains Pydantic models for schedule rules and API responses.
"""

from .schedule import (
    HealthResponse,
    NextTransition,
    PeakStatus,
    PeakStatusResponse,
    PeriodLabel,
    Provider,
    ScheduleRule,
)

__all__ = [
    "HealthResponse",
    "NextTransition",
    "PeakStatus",
    "PeakStatusResponse",
    "PeriodLabel",
    "Provider",
    "ScheduleRule",
]
