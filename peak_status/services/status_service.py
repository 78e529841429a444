"""
Status service - resolves the peak status of a provider from the schedule store.
Validates the provider, takes one rule snapshot per request and runs the engine.
"""

from datetime import datetime
from typing import List, Optional

from peak_status.config import settings
from peak_status.database.service import DatabaseService
from peak_status.exceptions import ProviderNotConfiguredError, UnknownProviderError
from peak_status.logging_config import get_logger
from peak_status.models.schedule import PeakStatusResponse, Provider, ScheduleRule
from peak_status.services.tariff_engine import parse_rules, resolve_peak_status
from peak_status.utils.time_utils import get_operating_timezone

logger = get_logger(__name__)


def parse_provider(value: Optional[str]) -> Provider:
    """
    Turn a provider identifier into a Provider.

    Raises:
        ProviderNotConfiguredError: If no provider is given
        UnknownProviderError: If the provider is not supported
    """
    if value is None or not str(value).strip():
        raise ProviderNotConfiguredError("Provider has not been set.")

    try:
        return Provider(str(value).strip().upper())
    except ValueError:
        raise UnknownProviderError(
            f"A valid provider ({' or '.join(p.value for p in Provider)}) is required"
        )


class StatusService:
    """Service answering peak status queries for a provider."""

    def __init__(
        self,
        store: DatabaseService,
        timezone: str = None,
        lookahead_days: int = None,
    ):
        self.store = store
        self.timezone = get_operating_timezone(timezone or settings.tariff_timezone)
        self.lookahead_days = settings.lookahead_days if lookahead_days is None else lookahead_days

    async def get_schedules(self, provider: Optional[str]) -> List[ScheduleRule]:
        """Return the valid rules of a provider in store order."""
        resolved = parse_provider(provider)
        records = await self.store.get_rules_for_provider(resolved)
        return parse_rules(records)

    async def get_status(self, provider: Optional[str], now: datetime = None) -> PeakStatusResponse:
        """
        Resolve the current peak status for a provider.

        Args:
            provider: Provider identifier (MEA/PEA); falls back to the configured default
            now: Clock reading, defaults to the current time in the operating timezone

        Returns:
            PeakStatusResponse for the provider
        """
        resolved = parse_provider(provider or settings.default_provider)
        if now is None:
            now = datetime.now(self.timezone)

        rules = await self.get_schedules(resolved.value)
        status = resolve_peak_status(rules, resolved, now, self.timezone, self.lookahead_days)

        logger.debug(
            "Resolved peak status",
            provider=resolved.value,
            is_peak=status.is_peak,
            time_to_next_change=status.time_to_next_change,
            next_period=status.next_period.value,
            rules_today=len(status.schedule_for_today),
        )

        return PeakStatusResponse(provider=resolved, **dict(status))
