"""PlantWatch API — dependency injection."""

from fastapi import Request

from plantwatch.core.core import PlantCare
from plantwatch.core.validation import HealthQuery, RequestInvalid, parse


def get_service(request: Request) -> PlantCare:
    """Get PlantCare service from app state."""
    return request.app.state.service


def get_health_query(request: Request) -> HealthQuery:
    """Validate the health query string, reporting every bad parameter."""
    query, errors = parse(HealthQuery, dict(request.query_params))
    if errors:
        raise RequestInvalid(errors)
    return query
