"""PlantWatch Request Validator — schemas for path, query and body input.

Every rule is checked and every violation reported, so a client fixing a
request sees all of its problems at once rather than one per round trip.
"""

import math
import re
from datetime import date
from typing import Any, NamedTuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from plantwatch.core.health import Metric

MAX_NAME_LENGTH = 100

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
NUMBER_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")
DATE_LABELS = {"start_date": "Start date", "end_date": "End date"}
COORDINATE_LABELS = {"latitude": "Latitude", "longitude": "Longitude"}
METRIC_VALUES = {m.value for m in Metric}

# Locations FastAPI prefixes onto request errors
_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestInvalid(Exception):
    """Raised at the HTTP edge when a request fails validation."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class Validated(NamedTuple):
    value: Any
    errors: list[str]


def _fail(kind: str, message: str, **context) -> PydanticCustomError:
    return PydanticCustomError(f"plantwatch.{kind}", message, context or None)


def _require_number(value: Any) -> float | int:
    # bool is an int subclass, and numeric strings are not numbers in JSON
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _fail("number_type", "Must be a number")
    if not math.isfinite(value):
        raise _fail("number_finite", "Must be a finite number")
    return value


class PlantIn(BaseModel):
    """Full plant body, used for both create and replace."""

    model_config = ConfigDict(alias_generator=to_camel)

    name: str
    weekly_water_need: float
    expected_humidity: int

    @field_validator("name", mode="before")
    @classmethod
    def _check_name(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise _fail("name_type", "Plant name must be a string")
        if len(value) < 1:
            raise _fail("name_required", "Plant name is required")
        if len(value) > MAX_NAME_LENGTH:
            raise _fail(
                "name_length",
                "Plant name must be at most {max_length} characters",
                max_length=MAX_NAME_LENGTH,
            )
        if "/" in value:
            raise _fail("name_slash", "Plant name must not contain '/'")
        return value

    @field_validator("weekly_water_need", mode="before")
    @classmethod
    def _check_water_need(cls, value: Any) -> float:
        value = _require_number(value)
        if value <= 0:
            raise _fail("positive", "Must be a positive number")
        return float(value)

    @field_validator("expected_humidity", mode="before")
    @classmethod
    def _check_humidity(cls, value: Any) -> int:
        value = _require_number(value)
        if isinstance(value, float):
            if not value.is_integer():
                raise _fail("integer", "Must be a whole number")
            value = int(value)
        if value < 0:
            raise _fail("minimum", "Minimum value is 0")
        if value > 100:
            raise _fail("maximum", "Maximum value is 100")
        return value


class HealthQuery(BaseModel):
    """Query string of the plant health endpoints."""

    model_config = ConfigDict(alias_generator=to_camel)

    start_date: date
    end_date: date
    metric: Metric = Field(alias="filter")
    latitude: float
    longitude: float

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any, info: ValidationInfo) -> date:
        label = DATE_LABELS[info.field_name]
        if isinstance(value, date):
            return value
        if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
            raise _fail("date_format", "{label} must be in YYYY-MM-DD format", label=label)
        try:
            return date.fromisoformat(value)
        except ValueError:
            raise _fail("date_invalid", "{label} must be a valid date", label=label) from None

    @field_validator("end_date")
    @classmethod
    def _end_not_before_start(cls, value: date, info: ValidationInfo) -> date:
        start = info.data.get("start_date")
        if start is not None and value < start:
            raise _fail("date_order", "End date must be on or after the start date")
        return value

    @field_validator("metric", mode="before")
    @classmethod
    def _check_metric(cls, value: Any) -> Metric:
        if not isinstance(value, str) or value not in METRIC_VALUES:
            raise _fail("metric_enum", "Filter must be either 'water' or 'humidity'")
        return Metric(value)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _parse_coordinate(cls, value: Any, info: ValidationInfo) -> float:
        label = COORDINATE_LABELS[info.field_name]
        if isinstance(value, str) and NUMBER_PATTERN.fullmatch(value):
            number = float(value)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            number = float(value)
        else:
            raise _fail("coordinate", "{label} must be a valid number", label=label)
        if not math.isfinite(number):
            raise _fail("coordinate", "{label} must be a valid number", label=label)
        return number


def error_messages(errors: list[dict]) -> list[str]:
    """Flatten pydantic error dicts into one readable message each."""
    messages = []
    for error in errors:
        field = ".".join(str(part) for part in error.get("loc", ()) if part not in _REQUEST_PARTS)
        if error["type"].startswith("plantwatch."):
            messages.append(error["msg"])
        elif error["type"] == "missing":
            messages.append(f"{field or 'Request body'} is required")
        elif field:
            messages.append(f"{field}: {error['msg']}")
        else:
            messages.append(error["msg"])
    return messages


def parse(model: type[ModelT], data: Any) -> Validated:
    """Validate ``data`` against ``model`` without raising.

    Returns ``Validated(value, [])`` on success and
    ``Validated(None, messages)`` with every violation otherwise.
    """
    try:
        return Validated(model.model_validate(data), [])
    except ValidationError as e:
        return Validated(None, error_messages(e.errors(include_url=False)))
