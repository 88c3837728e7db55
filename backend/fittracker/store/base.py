"""Store contracts shared by every backend.

Backends satisfy these protocols structurally; callers (routers, the seed
script, the stats endpoints) only ever see `Storage`.
"""
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from fittracker.core.security import hash_password
from fittracker.schemas.user import SignupRequest, UserRecord
from fittracker.schemas.workout import WorkoutCreate, WorkoutRead

# Fields a partial update may never replace
PROTECTED_WORKOUT_FIELDS = frozenset({"id", "user_id", "created_at"})
PROTECTED_USER_FIELDS = frozenset({"id", "created_at", "password_hash"})


class WorkoutStore(Protocol):
    def create(self, payload: WorkoutCreate) -> WorkoutRead: ...

    def get(self, workout_id: int) -> WorkoutRead: ...

    def list_by_user(self, user_id: int) -> list[WorkoutRead]: ...

    def update(self, workout_id: int, changes: dict[str, Any]) -> WorkoutRead: ...

    def delete(self, workout_id: int) -> None: ...


class UserStore(Protocol):
    def create(self, payload: SignupRequest) -> UserRecord: ...

    def get(self, user_id: int) -> UserRecord: ...

    def get_by_email(self, email: str) -> Optional[UserRecord]: ...

    def update(self, user_id: int, changes: dict[str, Any]) -> UserRecord: ...


@dataclass
class Storage:
    users: UserStore
    workouts: WorkoutStore


def most_recent_first(workouts: list[WorkoutRead]) -> list[WorkoutRead]:
    """Order by (date, time) descending; ISO strings sort chronologically."""
    return sorted(workouts, key=lambda w: (w.date, w.time, w.id), reverse=True)


def clean_workout_changes(changes: dict[str, Any]) -> dict[str, Any]:
    return {
        k: v for k, v in changes.items()
        if k in WorkoutRead.model_fields and k not in PROTECTED_WORKOUT_FIELDS
    }


def clean_user_changes(changes: dict[str, Any]) -> dict[str, Any]:
    """Drop unknown/protected keys and turn a new password into a hash."""
    cleaned = {
        k: v for k, v in changes.items()
        if k in UserRecord.model_fields and k not in PROTECTED_USER_FIELDS
    }
    password = changes.get("password")
    if password:
        cleaned["password_hash"] = hash_password(password)
    return cleaned
