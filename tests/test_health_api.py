import httpx
import pytest
from fastapi.testclient import TestClient

HEALTH_QUERY = {
    "startDate": "2024-01-01",
    "endDate": "2024-01-03",
    "filter": "water",
    "latitude": "52.52",
    "longitude": "13.41",
}


def _query(**overrides):
    return {**HEALTH_QUERY, **overrides}


def test_water_health(client, monstera, weather_api):
    response = client.get("/plants/Monstera/health", params=HEALTH_QUERY)

    assert response.status_code == 200
    assert response.json() == {
        "data": [
            {"date": "2024-01-01", "rain": 0.0, "dailyWaterNeed": 1.0, "waterDeficit": 1.0},
            {"date": "2024-01-02", "rain": 0.5, "dailyWaterNeed": 1.0, "waterDeficit": 0.5},
            {"date": "2024-01-03", "rain": 3.2, "dailyWaterNeed": 1.0, "waterDeficit": 0.0},
        ]
    }
    assert weather_api.last_params["daily"] == "rain_sum"
    assert weather_api.last_params["start_date"] == "2024-01-01"
    assert weather_api.last_params["end_date"] == "2024-01-03"


def test_humidity_health(client, monstera, weather_api):
    response = client.get("/plants/Monstera/health", params=_query(filter="humidity"))

    assert response.status_code == 200
    assert response.json() == {
        "data": [
            {"date": "2024-01-01", "humidity": 80.0, "expectedHumidity": 60, "humidityDeficit": 0.0},
            {"date": "2024-01-02", "humidity": 55.0, "expectedHumidity": 60, "humidityDeficit": 5.0},
            {"date": "2024-01-03", "humidity": 61.0, "expectedHumidity": 60, "humidityDeficit": 0.0},
        ]
    }
    assert weather_api.last_params["daily"] == "relative_humidity_2m_mean"


def test_health_with_no_upstream_data(client, monstera, weather_api):
    weather_api.payload = {"latitude": 52.52, "longitude": 13.41}

    response = client.get("/plants/Monstera/health", params=HEALTH_QUERY)

    assert response.status_code == 200
    assert response.json() == {"data": []}


def test_end_date_before_start_date(client, monstera, weather_api):
    response = client.get("/plants/Monstera/health", params=_query(startDate="2024-01-10", endDate="2024-01-01"))

    assert response.status_code == 400
    assert response.json() == {"errors": ["End date must be on or after the start date"]}
    assert weather_api.requests == []


def test_unknown_filter(client, monstera):
    response = client.get("/plants/Monstera/health", params=_query(filter="banana"))

    assert response.status_code == 400
    assert response.json() == {"errors": ["Filter must be either 'water' or 'humidity'"]}


def test_missing_query_parameters_are_all_reported(client, monstera):
    response = client.get("/plants/Monstera/health")

    assert response.status_code == 400
    assert response.json()["errors"] == [
        "startDate is required",
        "endDate is required",
        "filter is required",
        "latitude is required",
        "longitude is required",
    ]


def test_health_for_missing_plant(client, weather_api):
    response = client.get("/plants/Ghost/health", params=HEALTH_QUERY)

    assert response.status_code == 404
    assert response.json() == {"errors": ["Plant not found"]}
    assert weather_api.requests == []


def test_upstream_error_is_mirrored(client, monstera, weather_api):
    weather_api.status_code = 400
    weather_api.payload = {"error": True, "reason": "Invalid coordinates"}

    response = client.get("/plants/Monstera/health", params=_query(latitude="999"))

    assert response.status_code == 400
    assert response.json() == {"errors": ["Historic Forecast API error: Invalid coordinates"]}


def test_upstream_unreachable(client, monstera, weather_api):
    weather_api.error = httpx.ConnectError("Connection refused")

    response = client.get("/plants/Monstera/health", params=HEALTH_QUERY)

    assert response.status_code == 502
    assert response.json() == {"errors": ["Historic Forecast API error: Connection refused"]}


def test_unexpected_failure_is_a_generic_500(app, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("disk on fire")

    with TestClient(app, raise_server_exceptions=False) as client:
        client.post("/plants", json={"name": "Fern", "weeklyWaterNeed": 2, "expectedHumidity": 80})
        monkeypatch.setattr(app.state.service.plants, "get_by_name", explode)

        response = client.get("/plants/Fern/health", params=HEALTH_QUERY)

    assert response.status_code == 500
    assert response.json() == {"errors": ["Internal server error"]}


def test_water_summary(client, monstera):
    response = client.get("/plants/Monstera/health/summary", params=HEALTH_QUERY)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["days"] == 3
    assert data["totalWaterNeed"] == pytest.approx(3.0)
    assert data["totalRainfall"] == pytest.approx(3.7)
    assert data["totalDeficit"] == pytest.approx(1.5)
    assert data["daysWithRain"] == 1
    assert data["percentCovered"] == pytest.approx(123.333, rel=1e-3)


def test_humidity_summary(client, monstera):
    response = client.get("/plants/Monstera/health/summary", params=_query(filter="humidity"))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["days"] == 3
    assert data["avgExpectedHumidity"] == pytest.approx(60)
    assert data["avgActualHumidity"] == pytest.approx(65.333, rel=1e-3)
    assert data["daysWithDeficit"] == 1
    assert data["averageDeficit"] == pytest.approx(-5.333, rel=1e-3)


def test_summary_validates_query(client, monstera):
    response = client.get("/plants/Monstera/health/summary", params=_query(latitude="north"))

    assert response.status_code == 400
    assert response.json() == {"errors": ["Latitude must be a valid number"]}


def test_metric_is_not_a_substitute_for_filter(client, monstera, weather_api):
    query = {k: v for k, v in HEALTH_QUERY.items() if k != "filter"}

    response = client.get("/plants/Monstera/health", params={**query, "metric": "water"})

    assert response.status_code == 400
    assert response.json() == {"errors": ["filter is required"]}
    assert weather_api.requests == []


def test_underscored_coordinates_are_rejected(client, monstera, weather_api):
    response = client.get("/plants/Monstera/health", params=_query(latitude="5_2"))

    assert response.status_code == 400
    assert response.json() == {"errors": ["Latitude must be a valid number"]}
    assert weather_api.requests == []
