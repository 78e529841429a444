"""
Pydantic data models for tariff schedule rules and status responses.
Field aliases follow the camelCase record format of the schedule store.
"""

from datetime import date, datetime, time
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from peak_status.config import settings
from peak_status.utils.time_utils import get_operating_timezone, parse_time_of_day, to_operating_time


class Provider(str, Enum):
    """
    Supported utility providers.
    """
    MEA = "MEA"  # Metropolitan Electricity Authority
    PEA = "PEA"  # Provincial Electricity Authority


class PeriodLabel(str, Enum):
    """
    Tariff period labels exposed to clients.
    """
    ON_PEAK = "ON_PEAK"
    OFF_PEAK = "OFF_PEAK"

    @classmethod
    def from_is_peak(cls, is_peak: bool) -> "PeriodLabel":
        return cls.ON_PEAK if is_peak else cls.OFF_PEAK


class ScheduleRule(BaseModel):
    """
    One tariff rule of a provider.

    A rule either recurs weekly (day_of_week, 0 = Sunday) or overrides a single
    calendar date (specific_date). Its state holds from start_time until the
    start_time of the next rule of the same day; end_time is kept as recorded.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    provider: Provider = Field(description="Utility provider the rule belongs to")
    day_of_week: Optional[int] = Field(
        default=None,
        alias="dayOfWeek",
        ge=0,
        le=6,
        description="Recurring weekday, 0 = Sunday through 6 = Saturday"
    )
    specific_date: Optional[date] = Field(
        default=None,
        alias="specificDate",
        description="Single calendar date this rule overrides (e.g. public holiday)"
    )
    start_time: time = Field(alias="startTime", description="Time of day the state begins (HH:MM)")
    end_time: time = Field(alias="endTime", description="Recorded end time (HH:MM), not used for resolution")
    is_peak: bool = Field(alias="isPeak", description="True when the period is on-peak")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time_fields(cls, value):
        return parse_time_of_day(value)

    @field_validator("specific_date", mode="before")
    @classmethod
    def date_from_datetime(cls, value):
        # Aware timestamps name the day in the operating timezone
        if isinstance(value, datetime):
            if value.tzinfo is not None:
                value = to_operating_time(value, get_operating_timezone(settings.tariff_timezone))
            return value.date()
        return value

    @model_validator(mode="after")
    def check_applies_to(self) -> "ScheduleRule":
        if (self.day_of_week is None) == (self.specific_date is None):
            raise ValueError("Rule must set exactly one of dayOfWeek or specificDate")
        return self

    @field_serializer("start_time", "end_time")
    def serialize_time_fields(self, value: time) -> str:
        return value.strftime("%H:%M")


class NextTransition(BaseModel):
    """
    The next instant at which the tariff state changes.
    """
    at: datetime = Field(description="Aware timestamp of the transition")
    seconds_until: int = Field(description="Whole seconds from the evaluation instant")
    is_peak: bool = Field(description="State that begins at the transition")


class PeakStatus(BaseModel):
    """
    Resolved tariff state for an instant.
    time_to_next_change is -1 when no transition is known within the lookahead horizon.
    """
    model_config = ConfigDict(populate_by_name=True)

    is_peak: bool = Field(alias="isPeak", description="Whether the instant is on-peak")
    time_to_next_change: int = Field(
        alias="timeToNextChangeSeconds",
        description="Seconds until the next transition, or -1 when unknown"
    )
    next_period: PeriodLabel = Field(alias="nextPeriod", description="Period that follows the next transition")
    next_change_at: Optional[datetime] = Field(
        default=None,
        alias="nextChangeAt",
        description="Timestamp of the next transition in the operating timezone"
    )
    schedule_for_today: List[ScheduleRule] = Field(
        default_factory=list,
        alias="scheduleForToday",
        description="Ordered rules in force for the current calendar day"
    )
    message: Optional[str] = Field(
        default=None,
        description="Informational note, set when the current day has no schedule"
    )


class PeakStatusResponse(PeakStatus):
    """
    API response for the status endpoint.
    """
    provider: Provider = Field(description="Provider the status was resolved for")


class HealthResponse(BaseModel):
    """
    Health check response model.
    """
    status: str = Field(description="Health status")
    timestamp: datetime = Field(description="Health check timestamp")
    details: Optional[dict] = Field(default=None, description="Additional health details")
