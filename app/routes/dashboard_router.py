from fastapi import APIRouter, Body, HTTPException
from typing import List, Optional

from app.core.dates import year_end
from app.schemas.hiring import DashboardParameters, DashboardSnapshot, ForecastRequest, HiringDataPoint
from app.services.dashboard_service import hiring_dashboard
from app.services.prediction_service import prediction_service

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])

@router.get("/", response_model=DashboardSnapshot)
def get_dashboard():
    """Returns the current dashboard state.

    Returns:
        DashboardSnapshot: Parameters, both series, chart rows and metrics
                           from the most recent training cycle.
    """
    return hiring_dashboard.snapshot()

@router.get("/departments", response_model=List[str])
def list_departments():
    """Lists the departments the dashboard can be filtered by."""
    return hiring_dashboard.departments

@router.post(
    "/train",
    response_model=DashboardSnapshot,
    summary="Regenerate hiring history and forecast it"
)
async def train_and_predict(parameters: Optional[DashboardParameters] = Body(None)):
    """Runs one generate-then-forecast cycle with the given controls.

    Args:
        parameters (Optional[DashboardParameters]): Dashboard controls. Missing
            fields take their defaults; an empty body reuses the current ones.

    Returns:
        DashboardSnapshot: The dashboard state after the cycle.

    Raises:
        HTTPException: 503 if generating or forecasting fails.
    """
    try:
        return await hiring_dashboard.train_and_predict(parameters)
    except Exception as e:
        raise HTTPException(503, f"Training error: {str(e)}")

@router.post(
    "/forecast",
    response_model=List[HiringDataPoint],
    summary="Forecast a given history to the end of a year"
)
def forecast(request: ForecastRequest):
    """Continues the supplied history without touching the dashboard state.

    Args:
        request (ForecastRequest): History to continue and the target year.

    Returns:
        List[HiringDataPoint]: Monthly forecast through 31 December of the
                               target year.

    Raises:
        HTTPException: 503 if the forecasting service encounters an error.
    """
    try:
        return prediction_service.forecast(request.history, year_end(request.prediction_year))
    except Exception as e:
        raise HTTPException(503, f"Forecast error: {str(e)}")
