"""Shared fixtures for the PlantWatch test suite.

Provides:
- A temporary SQLite database per test
- A fake Open-Meteo API served through httpx.MockTransport
- A FastAPI TestClient wired to both
"""

import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from plantwatch.api.main import create_app
from plantwatch.core.config import Settings
from plantwatch.core.repository import PlantRepository
from plantwatch.models import Base, create_session_factory

logging.getLogger("plantwatch").setLevel(logging.WARNING)

WEATHER_API_BASE = "https://weather.test/v1"


class FakeWeatherApi:
    """Stands in for the historical forecast API.

    Records every request and answers with ``status_code`` and ``payload``;
    set ``error`` to make the transport itself fail.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.payload: object = {
            "latitude": 52.52,
            "longitude": 13.41,
            "timezone": "Europe/Berlin",
            "daily": {
                "time": ["2024-01-01", "2024-01-02", "2024-01-03"],
                "rain_sum": [0.0, 0.5, 3.2],
                "relative_humidity_2m_mean": [80, 55, 61],
            },
        }
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_params(self) -> dict:
        return dict(self.requests[-1].url.params)


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'plants.db'}",
        weather_api_base=WEATHER_API_BASE,
        log_level="WARNING",
    )


@pytest.fixture()
def weather_api():
    return FakeWeatherApi()


@pytest.fixture()
def http_client(weather_api):
    return httpx.AsyncClient(transport=httpx.MockTransport(weather_api))


@pytest.fixture()
def session_factory(settings):
    engine, SessionFactory = create_session_factory(settings.database_url)
    Base.metadata.create_all(bind=engine)
    yield SessionFactory
    engine.dispose()


@pytest.fixture()
def repo(session_factory):
    return PlantRepository(session_factory)


@pytest.fixture()
def app(settings, http_client):
    return create_app(settings, http_client=http_client)


@pytest.fixture()
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def monstera(client):
    response = client.post(
        "/plants",
        json={"name": "Monstera", "weeklyWaterNeed": 7, "expectedHumidity": 60},
    )
    assert response.status_code == 201
    return response.json()["data"]["plant"]
