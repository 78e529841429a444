"""
FastAPI route handlers for the main API endpoints.
Exposes the peak status of a provider and its schedule rules.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from peak_status.config import settings
from peak_status.database.service import DatabaseService
from peak_status.exceptions import (
    PeakStatusAPIException,
    ProviderNotConfiguredError,
    UnknownProviderError,
)
from peak_status.logging_config import get_logger
from peak_status.models.schedule import HealthResponse, PeakStatusResponse, ScheduleRule
from peak_status.services.status_service import StatusService

logger = get_logger(__name__)

router = APIRouter()


def get_schedule_store(request: Request) -> DatabaseService:
    """Schedule store owned by the running application."""
    return request.app.state.schedule_store


def get_status_service(store: DatabaseService = Depends(get_schedule_store)) -> StatusService:
    """Status service bound to the application's schedule store."""
    return StatusService(store)


@router.get("/health", response_model=HealthResponse)
async def health_check(store: DatabaseService = Depends(get_schedule_store)):
    """
    Health check endpoint for monitoring and load balancers.
    Reports whether the schedule store is reachable and which timezone
    tariff rules are evaluated in.
    """
    try:
        db_healthy = await store.health_check()

        details = {
            "service": "peak-status-api",
            "database": "ok" if db_healthy else "unavailable",
            "timezone": settings.tariff_timezone,
            "lookahead_days": settings.lookahead_days,
        }

        return HealthResponse(
            status="healthy" if db_healthy else "unhealthy",
            timestamp=datetime.now(),
            details=details
        )

    except Exception as e:
        logger.error("Health check failed", error=str(e))
        return HealthResponse(
            status="unhealthy",
            timestamp=datetime.now(),
            details={"service": "peak-status-api", "error": str(e)}
        )


@router.get("/status", response_model=PeakStatusResponse)
async def get_status(
    provider: Optional[str] = Query(
        default=None,
        description="Provider to evaluate (MEA or PEA). Defaults to the configured provider."
    ),
    status_service: StatusService = Depends(get_status_service),
):
    """
    Determine the current peak status and countdown for a provider.

    Returns:
        PeakStatusResponse with the current state, seconds until the next
        change (-1 when no change is known) and the period that follows.

    Raises:
        HTTPException: 400 if the provider is missing or unknown, 500 for server errors.
    """
    try:
        return await status_service.get_status(provider)

    except (ProviderNotConfiguredError, UnknownProviderError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PeakStatusAPIException as e:
        logger.error("Peak status error", error=str(e), provider=provider)
        raise HTTPException(status_code=500, detail="Server error fetching status")
    except Exception as e:
        logger.error("Unexpected error", error=str(e), provider=provider)
        raise HTTPException(status_code=500, detail="Server error fetching status")


@router.get("/schedules/{provider}", response_model=List[ScheduleRule])
async def get_schedules(
    provider: str,
    status_service: StatusService = Depends(get_status_service),
):
    """
    List the schedule rules of a provider in store order.
    Malformed rules are left out, as they are for status resolution.

    Raises:
        HTTPException: 400 for an unknown provider, 500 for server errors.
    """
    try:
        return await status_service.get_schedules(provider)

    except (ProviderNotConfiguredError, UnknownProviderError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PeakStatusAPIException as e:
        logger.error("Peak status error", error=str(e), provider=provider)
        raise HTTPException(status_code=500, detail="Server error fetching schedules")
    except Exception as e:
        logger.error("Unexpected error", error=str(e), provider=provider)
        raise HTTPException(status_code=500, detail="Server error fetching schedules")
