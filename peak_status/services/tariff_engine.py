"""
Tariff-period resolution engine.

Resolves whether an instant is on-peak for a provider and how long until the
state changes. A day's rules form a step function over the day: each rule's
is_peak holds from its start_time until the start_time of the next rule, or
through midnight for the last one. Date overrides (specific_date) replace the
weekly rules of that day entirely.

All functions are pure; callers pass the full rule snapshot and the clock.
"""

from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Mapping, Optional

import pytz
from pydantic import ValidationError

from peak_status.exceptions import InvalidScheduleRuleError
from peak_status.logging_config import get_logger
from peak_status.models.schedule import (
    NextTransition,
    PeakStatus,
    PeriodLabel,
    Provider,
    ScheduleRule,
)
from peak_status.utils.time_utils import (
    at_time_of_day,
    seconds_until,
    store_weekday,
    to_operating_time,
)

logger = get_logger(__name__)

# Reported when no transition is known within the lookahead horizon
NO_KNOWN_CHANGE = -1

# Attached to the status when the current day has no rules
NO_SCHEDULE_MESSAGE = "No peak schedule defined for today."


def parse_rule(record: Mapping[str, Any]) -> ScheduleRule:
    """
    Validate one raw rule record.

    Raises:
        InvalidScheduleRuleError: If the record is not a valid rule
    """
    try:
        return ScheduleRule.model_validate(record)
    except ValidationError as e:
        raise InvalidScheduleRuleError("; ".join(err["msg"] for err in e.errors()))


def parse_rules(records: Iterable[Mapping[str, Any]]) -> List[ScheduleRule]:
    """
    Validate raw rule records, excluding the ones that fail validation.

    Args:
        records: Flat records with provider, dayOfWeek|specificDate,
                 startTime, endTime and isPeak fields

    Returns:
        Valid rules in input order
    """
    rules = []
    for index, record in enumerate(records):
        try:
            rules.append(parse_rule(record))
        except InvalidScheduleRuleError as e:
            logger.warning(
                "Excluding malformed schedule rule",
                index=index,
                rule_id=record.get("id") if isinstance(record, Mapping) else None,
                error=str(e),
            )
    return rules


def select_day_rules(rules: Iterable[ScheduleRule], provider: Provider, day: date) -> List[ScheduleRule]:
    """
    Select the rules in force for one calendar day, ordered by start time.

    Date overrides for the day win over the weekly rules as a whole. The sort
    is stable, so rules sharing a start time keep their input order.
    """
    weekday = store_weekday(day)
    overrides = []
    weekly = []

    for rule in rules:
        if rule.provider != provider:
            continue
        if rule.specific_date is not None:
            if rule.specific_date == day:
                overrides.append(rule)
        elif rule.day_of_week == weekday:
            weekly.append(rule)

    selected = overrides if overrides else weekly
    return sorted(selected, key=lambda rule: rule.start_time)


def current_state(day_rules: List[ScheduleRule], now: datetime) -> bool:
    """
    Evaluate the tariff state at now from the day's ordered rules.

    The last rule whose start has been reached decides; before the first rule
    (or with no rules at all) the day is off-peak.
    """
    wall_time = now.time()
    state = False
    for rule in day_rules:
        if rule.start_time <= wall_time:
            state = rule.is_peak
    return state


def find_next_transition(
    rules: Iterable[ScheduleRule],
    provider: Provider,
    now: datetime,
    current_is_peak: bool,
    lookahead_days: int = 1,
    tz: Optional[pytz.BaseTzInfo] = None,
) -> Optional[NextTransition]:
    """
    Find the next instant where the state differs from current_is_peak.

    Today only rules starting strictly after now count. On each following day
    within the lookahead horizon the first differing rule of the day counts,
    whatever its position. Of rules sharing a start time only the last one is
    considered, matching current_state.

    Args:
        rules: Full rule snapshot for the provider
        provider: Provider to evaluate
        now: Clock reading; converted to tz when tz is given
        current_is_peak: Baseline state to compare against
        lookahead_days: Number of days after today to search
        tz: Operating timezone, defaults to the timezone of now

    Returns:
        The transition, or None when none is found within the horizon
    """
    rules = list(rules)
    if tz is None:
        tz = now.tzinfo
    else:
        now = to_operating_time(now, tz)
    today = now.date()

    for rule in _effective_rules(select_day_rules(rules, provider, today)):
        start = _localize(today, rule, tz)
        if start > now and rule.is_peak != current_is_peak:
            return NextTransition(at=start, seconds_until=seconds_until(start, now), is_peak=rule.is_peak)

    for offset in range(1, lookahead_days + 1):
        day = today + timedelta(days=offset)
        for rule in _effective_rules(select_day_rules(rules, provider, day)):
            if rule.is_peak != current_is_peak:
                start = _localize(day, rule, tz)
                return NextTransition(at=start, seconds_until=seconds_until(start, now), is_peak=rule.is_peak)

    return None


def resolve_peak_status(
    rules: Iterable[ScheduleRule],
    provider: Provider,
    now: datetime,
    tz: pytz.BaseTzInfo,
    lookahead_days: int = 1,
) -> PeakStatus:
    """
    Resolve the current tariff state and the countdown to the next change.

    Args:
        rules: Full rule snapshot for the provider
        provider: Provider to evaluate
        now: Clock reading; naive values are wall time in tz
        tz: Operating timezone
        lookahead_days: Number of days after today to search for a transition

    Returns:
        PeakStatus with time_to_next_change set to -1 when no change is known
    """
    rules = list(rules)
    now = to_operating_time(now, tz)

    day_rules = select_day_rules(rules, provider, now.date())
    is_peak = current_state(day_rules, now)
    transition = find_next_transition(rules, provider, now, is_peak, lookahead_days, tz)
    message = None if day_rules else NO_SCHEDULE_MESSAGE

    if transition is None:
        logger.debug(
            "No tariff transition within lookahead horizon",
            provider=provider.value,
            now=now.isoformat(),
            lookahead_days=lookahead_days,
        )
        return PeakStatus(
            is_peak=is_peak,
            time_to_next_change=NO_KNOWN_CHANGE,
            next_period=PeriodLabel.from_is_peak(is_peak),
            schedule_for_today=day_rules,
            message=message,
        )

    return PeakStatus(
        is_peak=is_peak,
        time_to_next_change=transition.seconds_until,
        next_period=PeriodLabel.from_is_peak(transition.is_peak),
        next_change_at=transition.at,
        schedule_for_today=day_rules,
        message=message,
    )


def _effective_rules(day_rules: List[ScheduleRule]) -> List[ScheduleRule]:
    # Last rule wins among equal start times
    return [
        rule for index, rule in enumerate(day_rules)
        if index + 1 == len(day_rules) or day_rules[index + 1].start_time != rule.start_time
    ]


def _localize(day: date, rule: ScheduleRule, tz) -> datetime:
    if hasattr(tz, "localize"):
        return at_time_of_day(day, rule.start_time, tz)
    return datetime.combine(day, rule.start_time, tzinfo=tz)
