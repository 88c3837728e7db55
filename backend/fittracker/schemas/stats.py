from datetime import datetime

from pydantic import BaseModel

from fittracker.schemas.user import UserRead
from fittracker.schemas.workout import WorkoutRead


class WorkoutStats(BaseModel):
    total_workouts: int
    this_week: int
    total_distance: float
    avg_duration: int


class WeeklyActivityPoint(BaseModel):
    day: str  # 'Sun', 'Mon', ...
    count: int


class MonthlyProgressPoint(BaseModel):
    month: str  # 'Jan', 'Feb', ...
    distance: float
    count: int


class DistributionSlice(BaseModel):
    type: str  # display label, e.g. 'Strength Training'
    count: int
    percentage: int


class ProgressTotals(BaseModel):
    total_hours: float
    total_calories: int
    avg_calories: int


class DataExport(BaseModel):
    user: UserRead
    workouts: list[WorkoutRead]
    export_date: datetime
