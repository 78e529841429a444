"""
Default tariff rules for the supported providers.

Weekdays are off-peak until 09:00, on-peak until 22:00 and off-peak again
afterwards; weekends are off-peak all day. Public holidays override the
weekday pattern with an all-day off-peak rule.
"""

from datetime import date
from typing import List

from peak_status.models.schedule import Provider, ScheduleRule

PUBLIC_HOLIDAYS_2025 = [
    date(2025, 1, 1),
    date(2025, 2, 12),
    date(2025, 4, 7),
    date(2025, 4, 13), date(2025, 4, 14), date(2025, 4, 15),
    date(2025, 5, 1), date(2025, 5, 5),
    date(2025, 6, 3),
    date(2025, 7, 28), date(2025, 7, 29),
    date(2025, 8, 12),
    date(2025, 10, 13), date(2025, 10, 23),
    date(2025, 12, 5), date(2025, 12, 10), date(2025, 12, 31),
]

WEEKDAYS = [1, 2, 3, 4, 5]  # Monday..Friday
WEEKEND = [0, 6]  # Sunday, Saturday


def default_schedule_rules(holidays: List[date] = None) -> List[ScheduleRule]:
    """Build the default rule set for every provider."""
    if holidays is None:
        holidays = PUBLIC_HOLIDAYS_2025

    rules = []
    for provider in Provider:
        for day in WEEKDAYS:
            rules.append(ScheduleRule(provider=provider, day_of_week=day, start_time="00:00", end_time="09:00", is_peak=False))
            rules.append(ScheduleRule(provider=provider, day_of_week=day, start_time="09:00", end_time="22:00", is_peak=True))
            rules.append(ScheduleRule(provider=provider, day_of_week=day, start_time="22:00", end_time="23:59", is_peak=False))

        for day in WEEKEND:
            rules.append(ScheduleRule(provider=provider, day_of_week=day, start_time="00:00", end_time="23:59", is_peak=False))

        for holiday in holidays:
            rules.append(ScheduleRule(provider=provider, specific_date=holiday, start_time="00:00", end_time="23:59", is_peak=False))

    return rules
