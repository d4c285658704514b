"""PlantWatch service — ties plants, weather and the health transform together."""

import logging

import httpx

from plantwatch.core.config import Settings
from plantwatch.core.health import build_records, summarize
from plantwatch.core.repository import PlantNotFound, PlantRepository
from plantwatch.core.validation import HealthQuery
from plantwatch.core.weather import WeatherGateway

logger = logging.getLogger("plantwatch.core")


class PlantCare:
    """Application service behind the HTTP API.

    Holds no per-request state; the repository and the weather gateway are
    the only shared resources and both are created once at start-up.
    """

    def __init__(self, settings: Settings, session_factory, http_client: httpx.AsyncClient):
        self.settings = settings
        self.plants = PlantRepository(session_factory)
        self.weather = WeatherGateway(settings, http_client)
        logger.info("PlantCare service initialized")

    async def get_plant_health(self, name: str, query: HealthQuery):
        """Daily deficit records for ``name`` over the queried period.

        Flow:
        1. Load plant (PlantNotFound if absent)
        2. Fetch the queried metric from the weather service
        3. Transform the series into one record per day
        """
        plant = self.plants.get_by_name(name)
        if plant is None:
            raise PlantNotFound(name)

        series = await self.weather.fetch(
            query.latitude,
            query.longitude,
            query.start_date,
            query.end_date,
            query.metric,
        )
        records = build_records(series, plant, query.metric)
        logger.debug(
            f"Built {len(records)} {query.metric.value} records for {name!r} "
            f"({query.start_date} to {query.end_date})"
        )
        return records

    async def get_plant_health_summary(self, name: str, query: HealthQuery):
        records = await self.get_plant_health(name, query)
        return summarize(records, query.metric)
