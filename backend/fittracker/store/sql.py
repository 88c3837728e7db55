"""Stores backed by SQLAlchemy (Postgres in production, SQLite in tests)."""
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fittracker.core.logging import get_logger
from fittracker.core.security import hash_password
from fittracker.models.user import User
from fittracker.models.workout import Workout
from fittracker.schemas.user import SignupRequest, UserRecord
from fittracker.schemas.workout import WorkoutCreate, WorkoutRead
from fittracker.store.base import clean_user_changes, clean_workout_changes
from fittracker.store.errors import DuplicateEmailError, NotFoundError, StorageError

logger = get_logger(__name__)


@contextmanager
def _db_errors(db: Session, action: str):
    """Roll back and surface any database failure as StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Database operation failed", action=action, error=str(e))
        raise StorageError(action) from e


class SqlWorkoutStore:
    def __init__(self, db: Session):
        self.db = db

    def _row(self, workout_id: int) -> Workout:
        with _db_errors(self.db, "load workout"):
            row = self.db.query(Workout).filter(Workout.id == workout_id).first()
        if not row:
            raise NotFoundError("Workout", workout_id)
        return row

    def create(self, payload: WorkoutCreate) -> WorkoutRead:
        row = Workout(
            **payload.model_dump(mode="json"),
            created_at=datetime.now(timezone.utc),
        )
        with _db_errors(self.db, "create workout"):
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        logger.info("Workout created", workout_id=row.id, user_id=row.user_id)
        return WorkoutRead.model_validate(row)

    def get(self, workout_id: int) -> WorkoutRead:
        return WorkoutRead.model_validate(self._row(workout_id))

    def list_by_user(self, user_id: int) -> list[WorkoutRead]:
        with _db_errors(self.db, "list workouts"):
            rows = (
                self.db.query(Workout)
                .filter(Workout.user_id == user_id)
                # Most recent first
                .order_by(Workout.date.desc(), Workout.time.desc(), Workout.id.desc())
                .all()
            )
        return [WorkoutRead.model_validate(r) for r in rows]

    def update(self, workout_id: int, changes: dict[str, Any]) -> WorkoutRead:
        row = self._row(workout_id)
        cleaned = clean_workout_changes(changes)
        # Validate the merged record before touching the row
        merged = WorkoutRead.model_validate(
            {**WorkoutRead.model_validate(row).model_dump(), **cleaned}
        )
        for key in cleaned:
            value = getattr(merged, key)
            setattr(row, key, value.value if key == "type" else value)
        with _db_errors(self.db, "update workout"):
            self.db.commit()
            self.db.refresh(row)
        logger.info("Workout updated", workout_id=workout_id, fields=sorted(cleaned))
        return WorkoutRead.model_validate(row)

    def delete(self, workout_id: int) -> None:
        row = self._row(workout_id)
        with _db_errors(self.db, "delete workout"):
            self.db.delete(row)
            self.db.commit()
        logger.info("Workout deleted", workout_id=workout_id)


class SqlUserStore:
    def __init__(self, db: Session):
        self.db = db

    def _row(self, user_id: int) -> User:
        with _db_errors(self.db, "load user"):
            row = self.db.query(User).filter(User.id == user_id).first()
        if not row:
            raise NotFoundError("User", user_id)
        return row

    def _commit_unique_email(self, email: str, action: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateEmailError(email) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Database operation failed", action=action, error=str(e))
            raise StorageError(action) from e

    def create(self, payload: SignupRequest) -> UserRecord:
        if self.get_by_email(payload.email) is not None:
            raise DuplicateEmailError(payload.email)
        row = User(
            **payload.model_dump(exclude={"password"}),
            password_hash=hash_password(payload.password),
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(row)
        self._commit_unique_email(payload.email, "create user")
        self.db.refresh(row)
        logger.info("User created", user_id=row.id)
        return UserRecord.model_validate(row)

    def get(self, user_id: int) -> UserRecord:
        return UserRecord.model_validate(self._row(user_id))

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        with _db_errors(self.db, "find user"):
            row = self.db.query(User).filter(User.email == email).first()
        return UserRecord.model_validate(row) if row else None

    def update(self, user_id: int, changes: dict[str, Any]) -> UserRecord:
        row = self._row(user_id)
        cleaned = clean_user_changes(changes)
        email = cleaned.get("email")
        if email and email != row.email and self.get_by_email(email) is not None:
            raise DuplicateEmailError(email)
        for key, value in cleaned.items():
            setattr(row, key, value)
        self._commit_unique_email(email or row.email, "update user")
        self.db.refresh(row)
        logger.info("User updated", user_id=user_id, fields=sorted(cleaned))
        return UserRecord.model_validate(row)
