import logging
import random
from datetime import date, datetime
from typing import List, Optional

from app.core.config import settings
from app.schemas.hiring import DashboardParameters, DashboardSnapshot, HiringDataPoint
from app.services.metrics_service import build_chart_series, summarize
from app.services.prediction_service import PredictionService, prediction_service
from app.services.trend_simulator import generate_history

logger = logging.getLogger(__name__)


class HiringDashboard:
    """In-memory state of the hiring dashboard for the running process.

    Holds the currently selected parameters and the latest historical and
    predicted series. Each training cycle replaces both series wholesale;
    overlapping cycles are not serialized, so the last one to finish wins.
    """

    def __init__(self, predictor: Optional[PredictionService] = None, rng: Optional[random.Random] = None):
        self.predictor = predictor or prediction_service
        self.rng = rng or random.Random(settings.SIMULATION_SEED)
        self.parameters = DashboardParameters()
        self.historical: List[HiringDataPoint] = []
        self.predictions: List[HiringDataPoint] = []
        self.generated_at: Optional[datetime] = None
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def departments(self) -> List[str]:
        return settings.department_list

    async def train_and_predict(
        self,
        parameters: Optional[DashboardParameters] = None,
        today: Optional[date] = None,
    ) -> DashboardSnapshot:
        """Regenerates the history and forecasts it to the end of the prediction year.

        The history runs from the training start date up to ``today`` and is
        published as soon as it exists; the forecast follows after the
        simulated training delay.

        Args:
            parameters (Optional[DashboardParameters]): New controls; the
                current ones are reused when omitted.
            today (Optional[date]): End of the history; defaults to today.

        Returns:
            DashboardSnapshot: The dashboard state after this cycle.
        """
        params = parameters or self.parameters
        today = today or date.today()
        previous_parameters, previous_historical = self.parameters, self.historical
        self.parameters = params
        self._in_flight += 1
        logger.info(
            f"Training cycle started: department={params.department}, trend={params.trend.value}, "
            f"start={params.training_start_date.isoformat()}, prediction_year={params.prediction_year}"
        )
        try:
            historical = generate_history(params.training_start_date, today, params.trend, rng=self.rng)
            self.historical = historical

            predictions = await self.predictor.train_and_predict(historical, params.prediction_year, today=today)
            # republish after the await: another cycle may have overwritten the state meanwhile
            self.parameters = params
            self.historical = historical
            self.predictions = predictions
            self.generated_at = datetime.now()
        except Exception:
            if self.parameters is params:
                self.parameters, self.historical = previous_parameters, previous_historical
            logger.error(f"Training cycle failed for prediction_year={params.prediction_year}; previous state kept.", exc_info=True)
            raise
        finally:
            self._in_flight -= 1

        logger.info(f"Training cycle finished: {len(historical)} historical and {len(predictions)} predicted months.")
        return self.snapshot()

    def snapshot(self) -> DashboardSnapshot:
        """Current dashboard state with chart rows and metrics derived from it."""
        params = self.parameters
        return DashboardSnapshot(
            parameters=params,
            historical=self.historical,
            predictions=self.predictions,
            chart=build_chart_series(
                self.historical, self.predictions, params.training_start_date, params.prediction_year
            ),
            metrics=summarize(self.historical, self.predictions),
            loading=self.loading,
            generated_at=self.generated_at,
        )

hiring_dashboard = HiringDashboard()
