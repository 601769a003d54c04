import asyncio
import logging
import math
import random
from datetime import date
from typing import List, Optional

from app.core.config import settings
from app.core.dates import MonthSequence, add_months, month_start, year_end
from app.schemas.hiring import HiringDataPoint

logger = logging.getLogger(__name__)

TREND_LOW, TREND_HIGH = -1.0, 2.0
NOISE_LOW, NOISE_HIGH = -2.0, 2.0


class PredictionService:
    def __init__(self, rng: Optional[random.Random] = None):
        """Initializes the prediction service.

        Args:
            rng (Optional[random.Random]): Random source shared by every
                forecast this service makes. Seeded from SIMULATION_SEED when
                omitted.
        """
        self.rng = rng or random.Random(settings.SIMULATION_SEED)

    def forecast(
        self,
        history: List[HiringDataPoint],
        end_date: date,
        today: Optional[date] = None,
        rng: Optional[random.Random] = None,
    ) -> List[HiringDataPoint]:
        """Continues a monthly hiring series up to an end date.

        The last historical point is the anchor. A single trend coefficient is
        drawn from [-1, 2) for the whole run and added at every step together
        with fresh noise from [-2, 2). Values are floored and clamped at zero.
        The anchor month itself is never part of the result.

        With no history to continue, the forecast is zero-filled from the
        current month through the end date.

        Args:
            history (List[HiringDataPoint]): Historical series, oldest first.
            end_date (date): Last day to forecast; its month is included.
            today (Optional[date]): Reference "now" for the zero-filled case.
            rng (Optional[random.Random]): Overrides the service's random source.

        Returns:
            List[HiringDataPoint]: Forecast points, one per month. Empty when
                the anchor month is already at or past the end month.
        """
        rng = rng or self.rng

        if not history:
            start = month_start(today or date.today())
            logger.warning(f"No history to continue; zero-filling forecast from {start.isoformat()} to {end_date.isoformat()}.")
            return [HiringDataPoint(date=month, hires=0) for month in MonthSequence(start, end_date)]

        anchor = history[-1]
        months = MonthSequence(add_months(anchor.date, 1), end_date)
        if not len(months):
            logger.info(f"Anchor month {anchor.date.isoformat()} is at or past {end_date.isoformat()}; nothing to forecast.")
            return []

        trend_factor = rng.random() * (TREND_HIGH - TREND_LOW) + TREND_LOW
        hires = anchor.hires
        predictions = []
        for month in months:
            noise = rng.random() * (NOISE_HIGH - NOISE_LOW) + NOISE_LOW
            hires = max(0, math.floor(hires + trend_factor + noise))
            predictions.append(HiringDataPoint(date=month, hires=hires))

        logger.info(f"Forecast {len(predictions)} months from anchor {anchor.date.isoformat()} with trend factor {trend_factor:.3f}.")
        return predictions

    async def train_and_predict(
        self,
        history: List[HiringDataPoint],
        prediction_year: int,
        today: Optional[date] = None,
        delay: Optional[float] = None,
    ) -> List[HiringDataPoint]:
        """Simulates model training, then forecasts to the end of a year.

        There is no real model behind this call: it waits for the configured
        training delay without blocking the event loop and then runs
        :meth:`forecast` up to 31 December of ``prediction_year``.

        Args:
            history (List[HiringDataPoint]): Historical series to continue.
            prediction_year (int): Year whose last month ends the forecast.
            today (Optional[date]): Reference "now" for the zero-filled case.
            delay (Optional[float]): Seconds to wait; TRAINING_DELAY_SECONDS if omitted.

        Returns:
            List[HiringDataPoint]: The forecast series.
        """
        delay = settings.TRAINING_DELAY_SECONDS if delay is None else delay
        if delay > 0:
            await asyncio.sleep(delay)
        return self.forecast(history, year_end(prediction_year), today=today)

prediction_service = PredictionService()
