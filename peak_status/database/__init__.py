"""
Database package for the Peak Status API.
Contains the schedule store and default rule seed data.
"""

from .seed import default_schedule_rules
from .service import DatabaseService

__all__ = [
    "DatabaseService",
    "default_schedule_rules",
]
