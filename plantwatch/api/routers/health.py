"""Health router — plant needs compared against historical weather."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path

from plantwatch.api.deps import get_health_query, get_service
from plantwatch.api.schemas import ErrorResponse, HealthEnvelope, HealthSummaryEnvelope
from plantwatch.core.core import PlantCare
from plantwatch.core.repository import PlantNotFound
from plantwatch.core.validation import HealthQuery
from plantwatch.core.weather import UpstreamError

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def _upstream_exception(e: UpstreamError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=f"Historic Forecast API error: {e.reason}")


@router.get("/{name}/health", response_model=HealthEnvelope, responses=ERROR_RESPONSES)
async def get_plant_health(
    name: Annotated[str, Path(min_length=1)],
    query: HealthQuery = Depends(get_health_query),
    service: PlantCare = Depends(get_service),
):
    """Daily water or humidity deficit for a plant at a location."""
    try:
        records = await service.get_plant_health(name, query)
    except PlantNotFound:
        raise HTTPException(status_code=404, detail="Plant not found")
    except UpstreamError as e:
        raise _upstream_exception(e)
    return HealthEnvelope(data=records)


@router.get("/{name}/health/summary", response_model=HealthSummaryEnvelope, responses=ERROR_RESPONSES)
async def get_plant_health_summary(
    name: Annotated[str, Path(min_length=1)],
    query: HealthQuery = Depends(get_health_query),
    service: PlantCare = Depends(get_service),
):
    """Totals and averages of the daily health records over the period."""
    try:
        summary = await service.get_plant_health_summary(name, query)
    except PlantNotFound:
        raise HTTPException(status_code=404, detail="Plant not found")
    except UpstreamError as e:
        raise _upstream_exception(e)
    return HealthSummaryEnvelope(data=summary)
