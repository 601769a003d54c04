from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date, datetime
from typing import List, Optional
import enum

from app.core.config import settings
from app.core.dates import add_months, month_start


class TrendMode(str, enum.Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class SeriesKind(str, enum.Enum):
    HISTORICAL = "historical"
    PREDICTED = "predicted"


def default_training_start() -> date:
    """First day of the current month, one year ago."""
    return add_months(month_start(date.today()), -12)


def default_prediction_year() -> int:
    return date.today().year + 1


def check_prediction_year(value: int) -> int:
    """Keeps a prediction year between the current year and the configured horizon."""
    current = date.today().year
    latest = min(current + settings.PREDICTION_HORIZON_YEARS, 9999)
    if value < current:
        raise ValueError(f"prediction_year must be {current} or later")
    if value > latest:
        raise ValueError(f"prediction_year must be {latest} or earlier")
    return value


class HiringDataPoint(BaseModel):
    """A single month of hiring, keyed by the first day of the month."""
    date: date
    hires: int = Field(..., ge=0)

    @field_validator("date")
    @classmethod
    def _check_month_key(cls, value: date) -> date:
        if value.day != 1:
            raise ValueError(f"date must be the first day of a month, got {value.isoformat()}")
        return value

    class Config:
        frozen = True


class DashboardParameters(BaseModel):
    """User-selected dashboard controls.

    Every field is optional on input and falls back to the dashboard defaults:
    a training window starting a year ago, a forecast to the end of next year,
    a stable trend and the default department.
    """
    training_start_date: date = Field(default_factory=default_training_start, examples=["2024-01-01"])
    prediction_year: int = Field(default_factory=default_prediction_year, examples=[2026])
    trend: TrendMode = TrendMode.STABLE
    department: str = Field(default=settings.DEFAULT_DEPARTMENT, examples=["Engineering"])

    @field_validator("training_start_date")
    @classmethod
    def _check_training_start(cls, value: date) -> date:
        if value < settings.EARLIEST_TRAINING_START:
            raise ValueError(f"training_start_date must be on or after {settings.EARLIEST_TRAINING_START.isoformat()}")
        if value > date.today():
            raise ValueError("training_start_date cannot be in the future")
        return value

    @field_validator("prediction_year")
    @classmethod
    def _check_prediction_year(cls, value: int) -> int:
        return check_prediction_year(value)

    @field_validator("department")
    @classmethod
    def _check_department(cls, value: str) -> str:
        if value not in settings.department_list:
            raise ValueError(f"Unknown department '{value}'. Expected one of: {', '.join(settings.department_list)}")
        return value


class ChartPoint(BaseModel):
    """Row of the merged chart series, tagged with where it came from."""
    date: date
    hires: int
    series: SeriesKind


class SummaryMetrics(BaseModel):
    """Key metrics shown above the hiring chart."""
    total_hires: int
    average_hires: str
    predicted_hires: int


class DashboardSnapshot(BaseModel):
    """Everything the front end needs to render one dashboard state."""
    parameters: DashboardParameters
    historical: List[HiringDataPoint] = []
    predictions: List[HiringDataPoint] = []
    chart: List[ChartPoint] = []
    metrics: SummaryMetrics
    loading: bool = False
    generated_at: Optional[datetime] = None


class ForecastRequest(BaseModel):
    """Input for a stateless forecast of an already known history."""
    history: List[HiringDataPoint] = []
    prediction_year: int = Field(default_factory=default_prediction_year)

    @field_validator("prediction_year")
    @classmethod
    def _check_prediction_year(cls, value: int) -> int:
        return check_prediction_year(value)

    @model_validator(mode="after")
    def _check_history_months(self) -> "ForecastRequest":
        for prev, cur in zip(self.history, self.history[1:]):
            if cur.date != add_months(prev.date, 1):
                raise ValueError(
                    f"history must list consecutive months in ascending order: "
                    f"{cur.date.isoformat()} cannot follow {prev.date.isoformat()}"
                )
        return self
