"""PlantWatch API — Pydantic response envelopes."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from plantwatch.core.health import HumidityRecord, HumiditySummary, WaterRecord, WaterSummary


# ── Plant schemas ─────────────────────────────────────────────────────────────

class PlantResponse(BaseModel):
    name: str
    weekly_water_need: float
    expected_humidity: int

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class PlantData(BaseModel):
    plant: PlantResponse


class PlantListData(BaseModel):
    plants: list[PlantResponse]


class PlantEnvelope(BaseModel):
    data: PlantData


class PlantListEnvelope(BaseModel):
    data: PlantListData


# ── Health schemas ────────────────────────────────────────────────────────────

class HealthEnvelope(BaseModel):
    data: list[WaterRecord] | list[HumidityRecord]


class HealthSummaryEnvelope(BaseModel):
    data: WaterSummary | HumiditySummary


# ── Generic response ──────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    errors: list[str]


class StatusResponse(BaseModel):
    status: str
    service: str
    version: str
