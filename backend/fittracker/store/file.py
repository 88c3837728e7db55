"""Stores persisted in a JSON key-value file.

Same key layout the browser client kept in localStorage: one list per
entity plus a next-id counter per entity.
"""
from datetime import datetime, timezone
from typing import Any, Optional

from fittracker.core.constants import (
    NEXT_USER_ID_KEY,
    NEXT_WORKOUT_ID_KEY,
    USERS_KEY,
    WORKOUTS_KEY,
)
from fittracker.core.logging import get_logger
from fittracker.core.security import hash_password
from fittracker.schemas.user import SignupRequest, UserRecord
from fittracker.schemas.workout import WorkoutCreate, WorkoutRead
from fittracker.store.base import clean_user_changes, clean_workout_changes, most_recent_first
from fittracker.store.errors import DuplicateEmailError, NotFoundError
from fittracker.store.kv import JsonKeyValueStore

logger = get_logger(__name__)


class FileWorkoutStore:
    def __init__(self, kv: JsonKeyValueStore):
        self.kv = kv

    def _all(self) -> list[WorkoutRead]:
        return [WorkoutRead.model_validate(w) for w in self.kv.get(WORKOUTS_KEY, [])]

    def _save(self, workouts: list[WorkoutRead], **extra: Any) -> None:
        self.kv.set_many({
            WORKOUTS_KEY: [w.model_dump(mode="json") for w in workouts],
            **extra,
        })

    def create(self, payload: WorkoutCreate) -> WorkoutRead:
        workouts = self._all()
        next_id = self.kv.get(NEXT_WORKOUT_ID_KEY, 1)
        workout = WorkoutRead(
            id=next_id,
            created_at=datetime.now(timezone.utc),
            **payload.model_dump(),
        )
        workouts.append(workout)
        self._save(workouts, **{NEXT_WORKOUT_ID_KEY: next_id + 1})
        logger.info("Workout created", workout_id=workout.id, user_id=workout.user_id)
        return workout

    def get(self, workout_id: int) -> WorkoutRead:
        for w in self._all():
            if w.id == workout_id:
                return w
        raise NotFoundError("Workout", workout_id)

    def list_by_user(self, user_id: int) -> list[WorkoutRead]:
        return most_recent_first([w for w in self._all() if w.user_id == user_id])

    def update(self, workout_id: int, changes: dict[str, Any]) -> WorkoutRead:
        workouts = self._all()
        for i, w in enumerate(workouts):
            if w.id == workout_id:
                merged = WorkoutRead.model_validate(
                    {**w.model_dump(), **clean_workout_changes(changes)}
                )
                workouts[i] = merged
                self._save(workouts)
                logger.info("Workout updated", workout_id=workout_id, fields=sorted(changes))
                return merged
        raise NotFoundError("Workout", workout_id)

    def delete(self, workout_id: int) -> None:
        workouts = self._all()
        remaining = [w for w in workouts if w.id != workout_id]
        if len(remaining) == len(workouts):
            raise NotFoundError("Workout", workout_id)
        self._save(remaining)
        logger.info("Workout deleted", workout_id=workout_id)


class FileUserStore:
    def __init__(self, kv: JsonKeyValueStore):
        self.kv = kv

    def _all(self) -> list[UserRecord]:
        return [UserRecord.model_validate(u) for u in self.kv.get(USERS_KEY, [])]

    def _save(self, users: list[UserRecord], **extra: Any) -> None:
        self.kv.set_many({
            USERS_KEY: [u.model_dump(mode="json") for u in users],
            **extra,
        })

    def create(self, payload: SignupRequest) -> UserRecord:
        users = self._all()
        if any(u.email == payload.email for u in users):
            raise DuplicateEmailError(payload.email)
        next_id = self.kv.get(NEXT_USER_ID_KEY, 1)
        user = UserRecord(
            id=next_id,
            created_at=datetime.now(timezone.utc),
            password_hash=hash_password(payload.password),
            **payload.model_dump(exclude={"password"}),
        )
        users.append(user)
        self._save(users, **{NEXT_USER_ID_KEY: next_id + 1})
        logger.info("User created", user_id=user.id)
        return user

    def get(self, user_id: int) -> UserRecord:
        for u in self._all():
            if u.id == user_id:
                return u
        raise NotFoundError("User", user_id)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        return next((u for u in self._all() if u.email == email), None)

    def update(self, user_id: int, changes: dict[str, Any]) -> UserRecord:
        users = self._all()
        cleaned = clean_user_changes(changes)
        email = cleaned.get("email")
        for i, u in enumerate(users):
            if u.id != user_id:
                continue
            if email and any(o.email == email and o.id != user_id for o in users):
                raise DuplicateEmailError(email)
            merged = UserRecord.model_validate({**u.model_dump(), **cleaned})
            users[i] = merged
            self._save(users)
            logger.info("User updated", user_id=user_id, fields=sorted(cleaned))
            return merged
        raise NotFoundError("User", user_id)
