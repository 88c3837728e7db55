"""Process-local store: dicts keyed by id, gone when the process exits."""
import itertools
from datetime import datetime, timezone
from typing import Any, Optional

from fittracker.core.logging import get_logger
from fittracker.core.security import hash_password
from fittracker.schemas.user import SignupRequest, UserRecord
from fittracker.schemas.workout import WorkoutCreate, WorkoutRead
from fittracker.store.base import clean_user_changes, clean_workout_changes, most_recent_first
from fittracker.store.errors import DuplicateEmailError, NotFoundError

logger = get_logger(__name__)


class MemoryWorkoutStore:
    def __init__(self):
        self._workouts: dict[int, WorkoutRead] = {}
        self._ids = itertools.count(1)

    def create(self, payload: WorkoutCreate) -> WorkoutRead:
        workout = WorkoutRead(
            id=next(self._ids),
            created_at=datetime.now(timezone.utc),
            **payload.model_dump(),
        )
        self._workouts[workout.id] = workout
        logger.info("Workout created", workout_id=workout.id, user_id=workout.user_id)
        return workout

    def get(self, workout_id: int) -> WorkoutRead:
        try:
            return self._workouts[workout_id]
        except KeyError:
            raise NotFoundError("Workout", workout_id) from None

    def list_by_user(self, user_id: int) -> list[WorkoutRead]:
        return most_recent_first(
            [w for w in self._workouts.values() if w.user_id == user_id]
        )

    def update(self, workout_id: int, changes: dict[str, Any]) -> WorkoutRead:
        current = self.get(workout_id)
        merged = WorkoutRead.model_validate(
            {**current.model_dump(), **clean_workout_changes(changes)}
        )
        self._workouts[workout_id] = merged
        logger.info("Workout updated", workout_id=workout_id, fields=sorted(changes))
        return merged

    def delete(self, workout_id: int) -> None:
        if self._workouts.pop(workout_id, None) is None:
            raise NotFoundError("Workout", workout_id)
        logger.info("Workout deleted", workout_id=workout_id)


class MemoryUserStore:
    def __init__(self):
        self._users: dict[int, UserRecord] = {}
        self._ids = itertools.count(1)

    def create(self, payload: SignupRequest) -> UserRecord:
        if self.get_by_email(payload.email) is not None:
            raise DuplicateEmailError(payload.email)
        data = payload.model_dump(exclude={"password"})
        user = UserRecord(
            id=next(self._ids),
            created_at=datetime.now(timezone.utc),
            password_hash=hash_password(payload.password),
            **data,
        )
        self._users[user.id] = user
        logger.info("User created", user_id=user.id)
        return user

    def get(self, user_id: int) -> UserRecord:
        try:
            return self._users[user_id]
        except KeyError:
            raise NotFoundError("User", user_id) from None

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        return next((u for u in self._users.values() if u.email == email), None)

    def update(self, user_id: int, changes: dict[str, Any]) -> UserRecord:
        current = self.get(user_id)
        cleaned = clean_user_changes(changes)
        email = cleaned.get("email")
        if email and email != current.email and self.get_by_email(email) is not None:
            raise DuplicateEmailError(email)
        merged = UserRecord.model_validate({**current.model_dump(), **cleaned})
        self._users[user_id] = merged
        logger.info("User updated", user_id=user_id, fields=sorted(cleaned))
        return merged
