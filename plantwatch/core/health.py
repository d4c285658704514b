"""PlantWatch Health Transform — weather series to per-day plant deficits.

Everything here is pure: the same series and plant always give the same
records, and nothing is read from or written to storage.
"""

from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Days above this much rain count as rainy days in the water summary
RAIN_DAY_THRESHOLD_MM = 1.0


class Metric(str, Enum):
    WATER = "water"
    HUMIDITY = "humidity"


@dataclass
class WeatherSeries:
    """Daily values for one metric, aligned by index with ``dates``.

    ``values`` may be shorter than ``dates`` or hold None for days the
    upstream service had no reading for.
    """

    dates: list[str] = field(default_factory=list)
    values: list[float | None] = field(default_factory=list)

    def value_at(self, index: int) -> float:
        if index < len(self.values) and self.values[index] is not None:
            return self.values[index]
        return 0.0

    def __len__(self) -> int:
        return len(self.dates)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WaterRecord(_CamelModel):
    date: str
    rain: float
    daily_water_need: float
    water_deficit: float


class HumidityRecord(_CamelModel):
    date: str
    humidity: float
    expected_humidity: int
    humidity_deficit: float


class WaterSummary(_CamelModel):
    days: int
    total_water_need: float
    total_rainfall: float
    total_deficit: float
    days_with_rain: int
    percent_covered: float | None


class HumiditySummary(_CamelModel):
    days: int
    avg_expected_humidity: float | None
    avg_actual_humidity: float | None
    days_with_deficit: int
    average_deficit: float | None


def daily_water_need(weekly_water_need: float) -> float:
    return weekly_water_need / 7


def water_records(series: WeatherSeries, weekly_water_need: float) -> list[WaterRecord]:
    need = daily_water_need(weekly_water_need)
    records = []
    for i, day in enumerate(series.dates):
        rain = series.value_at(i)
        records.append(WaterRecord(
            date=day,
            rain=rain,
            daily_water_need=need,
            water_deficit=max(0.0, need - rain),
        ))
    return records


def humidity_records(series: WeatherSeries, expected_humidity: int) -> list[HumidityRecord]:
    records = []
    for i, day in enumerate(series.dates):
        humidity = series.value_at(i)
        records.append(HumidityRecord(
            date=day,
            humidity=humidity,
            expected_humidity=expected_humidity,
            humidity_deficit=max(0.0, expected_humidity - humidity),
        ))
    return records


def build_records(series: WeatherSeries, plant, metric: Metric) -> list[WaterRecord] | list[HumidityRecord]:
    """Turn a weather series into one health record per day for ``plant``."""
    if metric == Metric.WATER:
        return water_records(series, plant.weekly_water_need)
    return humidity_records(series, plant.expected_humidity)


def summarize_water(records: list[WaterRecord]) -> WaterSummary:
    total_need = sum(r.daily_water_need for r in records)
    total_rain = sum(r.rain for r in records)
    return WaterSummary(
        days=len(records),
        total_water_need=total_need,
        total_rainfall=total_rain,
        total_deficit=sum(r.water_deficit for r in records),
        days_with_rain=sum(1 for r in records if r.rain > RAIN_DAY_THRESHOLD_MM),
        percent_covered=(total_rain / total_need * 100) if total_need > 0 else None,
    )


def summarize_humidity(records: list[HumidityRecord]) -> HumiditySummary:
    if not records:
        return HumiditySummary(
            days=0,
            avg_expected_humidity=None,
            avg_actual_humidity=None,
            days_with_deficit=0,
            average_deficit=None,
        )
    avg_expected = sum(r.expected_humidity for r in records) / len(records)
    avg_actual = sum(r.humidity for r in records) / len(records)
    return HumiditySummary(
        days=len(records),
        avg_expected_humidity=avg_expected,
        avg_actual_humidity=avg_actual,
        days_with_deficit=sum(1 for r in records if r.humidity_deficit > 0),
        # Signed, so a humid period shows up as a negative average
        average_deficit=avg_expected - avg_actual,
    )


def summarize(records, metric: Metric) -> WaterSummary | HumiditySummary:
    if metric == Metric.WATER:
        return summarize_water(records)
    return summarize_humidity(records)
