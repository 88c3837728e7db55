from typing import Optional

from fastapi import APIRouter, Depends, Query

from fittracker.core.config import settings
from fittracker.core.constants import WorkoutType
from fittracker.core.time_utils import local_now
from fittracker.schemas.stats import (
    DistributionSlice,
    MonthlyProgressPoint,
    ProgressTotals,
    WeeklyActivityPoint,
    WorkoutStats,
)
from fittracker.services import stats
from fittracker.store.base import Storage
from fittracker.store.factory import get_storage

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/user/{user_id}", response_model=WorkoutStats)
def get_summary(user_id: int, storage: Storage = Depends(get_storage)):
    """Dashboard cards: total, this week, total distance, average duration."""
    return stats.calculate_stats(
        storage.workouts.list_by_user(user_id),
        now=local_now(settings.timezone),
        week_start=settings.week_start_index,
    )


@router.get("/user/{user_id}/weekly", response_model=list[WeeklyActivityPoint])
def get_weekly_activity(user_id: int, storage: Storage = Depends(get_storage)):
    return stats.get_weekly_data(
        storage.workouts.list_by_user(user_id),
        now=local_now(settings.timezone),
        week_start=settings.week_start_index,
    )


@router.get("/user/{user_id}/monthly", response_model=list[MonthlyProgressPoint])
def get_monthly_progress(
    user_id: int,
    months: int = Query(settings.monthly_progress_months, ge=1, le=36),
    workout_type: Optional[WorkoutType] = Query(None, alias="type"),
    storage: Storage = Depends(get_storage),
):
    """
    Return distance and count per month for the last `months` months
    (including the current month), oldest first.

    Pass `type` to chart only one kind of workout.
    """
    workouts = storage.workouts.list_by_user(user_id)
    if workout_type is not None:
        workouts = [w for w in workouts if w.type == workout_type]
    return stats.get_monthly_progress(workouts, months, now=local_now(settings.timezone))


@router.get("/user/{user_id}/distribution", response_model=list[DistributionSlice])
def get_distribution(user_id: int, storage: Storage = Depends(get_storage)):
    return stats.get_workout_distribution(storage.workouts.list_by_user(user_id))


@router.get("/user/{user_id}/totals", response_model=ProgressTotals)
def get_progress_totals(user_id: int, storage: Storage = Depends(get_storage)):
    return stats.calculate_progress_totals(storage.workouts.list_by_user(user_id))
