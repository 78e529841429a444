"""
Services package for the Peak Status API.
Contains the tariff resolution engine and the status service built on it.
"""

from .status_service import StatusService, parse_provider
from .tariff_engine import (
    NO_KNOWN_CHANGE,
    current_state,
    find_next_transition,
    parse_rule,
    parse_rules,
    resolve_peak_status,
    select_day_rules,
)

__all__ = [
    "NO_KNOWN_CHANGE",
    "StatusService",
    "current_state",
    "find_next_transition",
    "parse_provider",
    "parse_rule",
    "parse_rules",
    "resolve_peak_status",
    "select_day_rules",
]
