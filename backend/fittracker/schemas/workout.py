from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fittracker.core.constants import WorkoutType
from fittracker.core.time_utils import as_utc, hhmm_to_time, parse_workout_date


class WorkoutBase(BaseModel):
    type: WorkoutType
    name: Optional[str] = None
    date: str  # 'YYYY-MM-DD'
    time: str  # 'HH:MM'

    duration: int = Field(gt=0)  # minutes
    distance: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    calories: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None


class WorkoutCreate(WorkoutBase):
    """Schema for logging a new workout."""

    user_id: int

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        parse_workout_date(v)
        return v

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        hhmm_to_time(v)
        return v


class WorkoutUpdate(BaseModel):
    """Schema for updating an existing workout (all fields optional).

    Owner, id and creation time are never replaced, so clients sending
    the full record back is fine.
    """

    model_config = ConfigDict(extra="ignore")

    type: Optional[WorkoutType] = None
    name: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    duration: Optional[int] = Field(default=None, gt=0)
    distance: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    calories: Optional[int] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        if v is not None:
            parse_workout_date(v)
        return v

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        if v is not None:
            hhmm_to_time(v)
        return v

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for key in ("type", "date", "time", "duration"):
            if key in self.model_fields_set and getattr(self, key) is None:
                raise ValueError(f"{key} cannot be null")
        return self

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True, mode="json")


class WorkoutRead(WorkoutBase):
    """A stored workout as returned to the frontend."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v):
        return as_utc(v)
