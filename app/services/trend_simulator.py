import logging
import random
from datetime import date
from typing import Callable, Dict, List, Optional

from app.core.config import settings
from app.core.dates import MonthSequence
from app.schemas.hiring import HiringDataPoint, TrendMode

logger = logging.getLogger(__name__)


def _step_up(hires: int, rng: random.Random) -> int:
    return hires + rng.randint(1, 5)


def _step_down(hires: int, rng: random.Random) -> int:
    return max(0, hires - rng.randint(1, 5))


def _step_stable(hires: int, rng: random.Random) -> int:
    return max(0, hires + rng.randint(-1, 1))


TREND_STEPS: Dict[TrendMode, Callable[[int, random.Random], int]] = {
    TrendMode.UP: _step_up,
    TrendMode.DOWN: _step_down,
    TrendMode.STABLE: _step_stable,
}


def generate_history(
    start: date,
    end: date,
    trend: TrendMode = TrendMode.STABLE,
    rng: Optional[random.Random] = None,
    baseline: Optional[int] = None,
) -> List[HiringDataPoint]:
    """Generates a synthetic monthly hiring series following a trend.

    The series starts from a fixed baseline and takes one random step per
    month before the month is recorded, so the first point already carries
    one step of drift. Upward runs add 1-5 hires a month, downward runs remove
    1-5, stable runs wobble by at most one. Counts are clamped at zero.

    Args:
        start (date): First month of the series (any day inside it).
        end (date): Last month of the series, inclusive.
        trend (TrendMode): Direction of the drift.
        rng (Optional[random.Random]): Random source; a fresh one if omitted.
        baseline (Optional[int]): Starting value; defaults to BASELINE_HIRES.

    Returns:
        List[HiringDataPoint]: One point per month, empty when start > end.

    Raises:
        ValueError: If the trend is not a known trend mode.
    """
    try:
        step = TREND_STEPS[TrendMode(trend)]
    except ValueError:
        raise ValueError(f"Unknown trend mode: {trend!r}") from None

    rng = rng or random.Random()
    hires = settings.BASELINE_HIRES if baseline is None else baseline

    months = MonthSequence(start, end)
    if not len(months):
        logger.warning(f"Empty training window {start.isoformat()} -> {end.isoformat()}; no history generated.")
        return []

    history = []
    for month in months:
        hires = step(hires, rng)
        history.append(HiringDataPoint(date=month, hires=hires))

    logger.info(f"Generated {len(history)} months of '{TrendMode(trend).value}' history ending at {hires} hires.")
    return history
