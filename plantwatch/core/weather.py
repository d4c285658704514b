"""PlantWatch Weather Gateway — historical daily weather from Open-Meteo."""

import logging
from datetime import date

import httpx
from pydantic import BaseModel, ValidationError

from plantwatch.core.config import Settings
from plantwatch.core.health import Metric, WeatherSeries

logger = logging.getLogger("plantwatch.weather")

# Daily variable requested from the upstream service for each metric
DAILY_FIELDS = {
    Metric.WATER: "rain_sum",
    Metric.HUMIDITY: "relative_humidity_2m_mean",
}


class UpstreamError(Exception):
    """The weather service refused the request or could not be reached."""

    def __init__(self, status_code: int, reason: str):
        super().__init__(f"{status_code}: {reason}")
        self.status_code = status_code
        self.reason = reason


class DailyData(BaseModel):
    time: list[str] | None = None
    rain_sum: list[float | None] | None = None
    relative_humidity_2m_mean: list[float | None] | None = None


class WeatherApiResponse(BaseModel):
    """Subset of the Open-Meteo response body; every part may be absent."""

    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None
    daily: DailyData | None = None
    error: bool | None = None
    reason: str | None = None


class WeatherGateway:
    """Fetches daily rain or humidity for a location and date range.

    One request per call, no caching and no retries. The HTTP client is
    owned by the caller so that it can be shared and closed at shutdown.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client
        self.base_url = settings.weather_api_base.rstrip("/")

    def build_params(self, lat: float, lon: float, start_date: date, end_date: date, metric: Metric) -> dict:
        return {
            "latitude": lat,
            "longitude": lon,
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "timezone": "auto",
            "daily": DAILY_FIELDS[metric],
        }

    async def fetch(self, lat: float, lon: float, start_date: date, end_date: date, metric: Metric) -> WeatherSeries:
        """Return the daily series for ``metric``, or raise UpstreamError."""
        params = self.build_params(lat, lon, start_date, end_date, metric)
        try:
            response = await self.client.get(f"{self.base_url}/forecast", params=params)
        except httpx.HTTPError as e:
            logger.warning(f"Weather API unreachable for ({lat}, {lon}): {e!r}")
            raise UpstreamError(502, str(e) or type(e).__name__) from e

        if not response.is_success:
            reason = self._error_reason(response)
            logger.warning(f"Weather API returned {response.status_code} for ({lat}, {lon}): {reason}")
            # Only reached by a client that does not follow redirects
            status_code = response.status_code if response.status_code >= 400 else 502
            raise UpstreamError(status_code, reason)

        return self.parse_response(response, metric)

    def parse_response(self, response: httpx.Response, metric: Metric) -> WeatherSeries:
        """Parse a successful response; malformed bodies give an empty series."""
        try:
            payload = WeatherApiResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning(f"Unexpected weather payload, treating as no data: {e}")
            return WeatherSeries()

        daily = payload.daily
        values = getattr(daily, DAILY_FIELDS[metric]) if daily else None
        if not daily or daily.time is None or values is None:
            logger.warning(f"Weather payload has no daily {DAILY_FIELDS[metric]!r} data")
            return WeatherSeries()

        return WeatherSeries(
            dates=[t.split("T")[0] for t in daily.time],
            values=values,
        )

    @staticmethod
    def _error_reason(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.reason_phrase or "Unknown error"
        if isinstance(body, dict) and body.get("reason"):
            return str(body["reason"])
        return response.reason_phrase or "Unknown error"
