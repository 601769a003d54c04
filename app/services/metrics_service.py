from datetime import date
from typing import List

import pandas as pd

from app.schemas.hiring import ChartPoint, HiringDataPoint, SeriesKind, SummaryMetrics
from app.core.dates import year_end


def total_hires(series: List[HiringDataPoint]) -> int:
    """Sum of hires over a series; 0 when it is empty."""
    return sum(point.hires for point in series)


def average_hires(series: List[HiringDataPoint]) -> str:
    """Mean monthly hires with one decimal place, or ``"0"`` for an empty series."""
    if not series:
        return "0"
    return f"{total_hires(series) / len(series):.1f}"


def summarize(historical: List[HiringDataPoint], predicted: List[HiringDataPoint]) -> SummaryMetrics:
    return SummaryMetrics(
        total_hires=total_hires(historical),
        average_hires=average_hires(historical),
        predicted_hires=total_hires(predicted),
    )


def build_chart_series(
    historical: List[HiringDataPoint],
    predicted: List[HiringDataPoint],
    training_start: date,
    prediction_year: int,
) -> List[ChartPoint]:
    """Merges both series into chart rows limited to the displayed years.

    Rows keep their historical-then-predicted order and are tagged with the
    series they came from. Only rows dated between 1 January of the earlier
    of the training start year and the prediction year, and 31 December of
    the prediction year, are kept.

    Args:
        historical (List[HiringDataPoint]): Generated history.
        predicted (List[HiringDataPoint]): Forecast continuing the history.
        training_start (date): Start of the training window.
        prediction_year (int): Last year shown on the chart.

    Returns:
        List[ChartPoint]: The filtered chart rows.
    """
    frames = [
        pd.DataFrame([p.model_dump() for p in points], columns=["date", "hires"]).assign(series=kind.value)
        for kind, points in ((SeriesKind.HISTORICAL, historical), (SeriesKind.PREDICTED, predicted))
        if points
    ]
    if not frames:
        return []
    df = pd.concat(frames, ignore_index=True)

    window_start = pd.Timestamp(min(training_start.year, prediction_year), 1, 1)
    window_end = pd.Timestamp(year_end(prediction_year))
    dates = pd.to_datetime(df["date"])
    df = df[(dates >= window_start) & (dates <= window_end)]

    return [
        ChartPoint(date=row.date, hires=int(row.hires), series=SeriesKind(row.series))
        for row in df.itertuples(index=False)
    ]
