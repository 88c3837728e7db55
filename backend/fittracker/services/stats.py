"""Workout statistics.

Pure functions over one user's workout list: no I/O, no caching, so the
same input (and the same `now`) always yields the same result. Records
whose date or time can't be parsed are left out of the date-bucketed
numbers but still count toward the overall totals.
"""
import math
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from fittracker.core.constants import (
    DAY_LABELS,
    MONTH_LABELS,
    SUNDAY,
    WORKOUT_TYPE_LABELS,
    WorkoutType,
)
from fittracker.core.logging import get_logger
from fittracker.core.time_utils import (
    parse_workout_date,
    parse_workout_datetime,
    round_half_up,
    shift_month,
    start_of_week,
    week_bounds,
)
from fittracker.schemas.stats import (
    DistributionSlice,
    MonthlyProgressPoint,
    ProgressTotals,
    WeeklyActivityPoint,
    WorkoutStats,
)

logger = get_logger(__name__)


def _distance(workout) -> float:
    value = float(getattr(workout, "distance", None) or 0)
    # inf/nan can't be rounded; treat them like a missing distance
    return value if math.isfinite(value) else 0.0


def _type_key(workout) -> str:
    raw = getattr(workout, "type", None)
    key = raw.value if isinstance(raw, WorkoutType) else str(raw)
    return key if key in WORKOUT_TYPE_LABELS else WorkoutType.other.value


def _total_distance(workouts: Iterable) -> float:
    return round_half_up(sum(_distance(w) for w in workouts), 1)


def calculate_stats(
    workouts: Sequence,
    now: Optional[datetime] = None,
    week_start: int = SUNDAY,
) -> WorkoutStats:
    """Dashboard summary: totals, this week's count and average duration."""
    now = now or datetime.now()
    start, end = week_bounds(now, week_start)

    this_week = 0
    for w in workouts:
        try:
            when = parse_workout_datetime(w.date, w.time)
        except (TypeError, ValueError):
            logger.debug("Skipping workout with bad date/time", workout_id=getattr(w, "id", None))
            continue
        if start <= when <= end:
            this_week += 1

    total_duration = sum(w.duration for w in workouts)
    avg_duration = int(round_half_up(total_duration / len(workouts))) if workouts else 0

    return WorkoutStats(
        total_workouts=len(workouts),
        this_week=this_week,
        total_distance=_total_distance(workouts),
        avg_duration=avg_duration,
    )


def get_weekly_data(
    workouts: Sequence,
    now: Optional[datetime] = None,
    week_start: int = SUNDAY,
) -> list[WeeklyActivityPoint]:
    """Workout count for each day of the current week, first day first."""
    now = now or datetime.now()
    first = start_of_week(now.date(), week_start)

    points: list[WeeklyActivityPoint] = []
    for i in range(7):
        day = first + timedelta(days=i)
        iso = day.isoformat()
        points.append(
            WeeklyActivityPoint(
                day=DAY_LABELS[day.weekday()],
                count=sum(1 for w in workouts if w.date == iso),
            )
        )
    return points


def get_monthly_progress(
    workouts: Sequence,
    months: int = 6,
    now: Optional[datetime] = None,
) -> list[MonthlyProgressPoint]:
    """
    Distance and workout count for the last `months` months, oldest first.

    The final entry is the month containing `now`. Months without
    workouts still appear, with zeros.
    """
    if months <= 0:
        return []
    now = now or datetime.now()

    by_month: dict[tuple[int, int], list] = {}
    for w in workouts:
        try:
            d = parse_workout_date(w.date)
        except (TypeError, ValueError):
            logger.debug("Skipping workout with bad date", workout_id=getattr(w, "id", None))
            continue
        by_month.setdefault((d.year, d.month), []).append(w)

    results: list[MonthlyProgressPoint] = []
    for i in range(months - 1, -1, -1):
        month = shift_month(now.date(), -i)
        bucket = by_month.get((month.year, month.month), [])
        results.append(
            MonthlyProgressPoint(
                month=MONTH_LABELS[month.month - 1],
                distance=_total_distance(bucket),
                count=len(bucket),
            )
        )
    return results


def get_workout_distribution(workouts: Sequence) -> list[DistributionSlice]:
    """Share of workouts per type, in order of first appearance."""
    if not workouts:
        return []

    counts: dict[str, int] = {}
    for w in workouts:
        key = _type_key(w)
        counts[key] = counts.get(key, 0) + 1

    total = len(workouts)
    return [
        DistributionSlice(
            type=WORKOUT_TYPE_LABELS[key],
            count=count,
            percentage=int(round_half_up(count / total * 100)),
        )
        for key, count in counts.items()
    ]


def calculate_progress_totals(workouts: Sequence) -> ProgressTotals:
    total_minutes = sum(w.duration for w in workouts)
    total_calories = sum(getattr(w, "calories", None) or 0 for w in workouts)
    avg_calories = int(round_half_up(total_calories / len(workouts))) if workouts else 0
    return ProgressTotals(
        total_hours=round_half_up(total_minutes / 60, 1),
        total_calories=total_calories,
        avg_calories=avg_calories,
    )
