from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from fittracker.core.constants import DEFAULT_PRIMARY_GOAL, DEFAULT_WEEKLY_WORKOUT_GOAL
from fittracker.core.time_utils import as_utc


class UserProfile(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    age: Optional[int] = Field(default=None, ge=1, le=120)
    height: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    weight: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)

    weekly_workout_goal: int = Field(default=DEFAULT_WEEKLY_WORKOUT_GOAL, ge=1, le=7)
    target_weight: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    primary_goal: str = DEFAULT_PRIMARY_GOAL


class SignupRequest(UserProfile):
    email: EmailStr
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserUpdate(BaseModel):
    """Profile and goal edits; every field optional."""

    model_config = ConfigDict(extra="ignore")

    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    age: Optional[int] = Field(default=None, ge=1, le=120)
    height: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    weight: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    weekly_workout_goal: Optional[int] = Field(default=None, ge=1, le=7)
    target_weight: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)
    primary_goal: Optional[str] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class UserRead(UserProfile):
    """Account as returned to the frontend; never carries the password."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v):
        return as_utc(v)


class UserRecord(UserRead):
    """Account as held by the stores."""

    password_hash: str


class AuthResponse(BaseModel):
    user: UserRead
