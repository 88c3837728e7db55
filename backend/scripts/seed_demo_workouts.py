"""Seed a demo account with twelve weeks of workouts.

Writes through the configured store (STORAGE_BACKEND), so it works the
same against Postgres, a JSON store file, or an in-memory run.

    cd backend && python scripts/seed_demo_workouts.py
"""
from datetime import date, timedelta
import random

from fittracker.core.config import settings
from fittracker.core.constants import WorkoutType
from fittracker.core.logging import get_logger, setup_logging
from fittracker.db import Base, SessionLocal, engine
from fittracker.schemas.user import SignupRequest
from fittracker.schemas.workout import WorkoutCreate
from fittracker.store.base import Storage
from fittracker.store.factory import process_storage, sql_storage

logger = get_logger(__name__)

DEMO_EMAIL = "demo@fittracker.local"
DEMO_PASSWORD = "demo-password"

# (weekday offset from Monday, type, name, time, duration min, distance range, calories)
WEEK_PLAN = [
    (0, WorkoutType.running, "Easy run", "07:00", 45, (3.0, 5.0), 420),
    (1, WorkoutType.strength, "Upper body", "18:30", 50, None, 300),
    (2, WorkoutType.cycling, "Commute ride", "08:00", 35, (6.0, 10.0), 350),
    (3, WorkoutType.yoga, "Mobility flow", "19:00", 30, None, 120),
    (5, WorkoutType.running, "Long run", "08:30", 90, (8.0, 13.0), 900),
    (6, WorkoutType.swimming, "Pool laps", "10:00", 40, (1.0, 1.5), 380),
]


def seed_demo_workouts(storage: Storage, weeks: int = 12) -> int:
    """Create the demo user if needed, then log `weeks` weeks of workouts."""
    user = storage.users.get_by_email(DEMO_EMAIL)
    if user is None:
        user = storage.users.create(
            SignupRequest(
                email=DEMO_EMAIL,
                password=DEMO_PASSWORD,
                first_name="Demo",
                last_name="Athlete",
            )
        )

    today = date.today()
    monday = today - timedelta(days=today.weekday())
    start = monday - timedelta(weeks=weeks - 1)

    created = 0
    for week in range(weeks):
        week_start = start + timedelta(weeks=week)
        for offset, kind, name, hhmm, minutes, dist_range, calories in WEEK_PLAN:
            d = week_start + timedelta(days=offset)
            # Skip future days
            if d > today:
                continue
            distance = round(random.uniform(*dist_range), 1) if dist_range else None
            storage.workouts.create(
                WorkoutCreate(
                    user_id=user.id,
                    type=kind,
                    name=name,
                    date=d.isoformat(),
                    time=hhmm,
                    duration=minutes,
                    distance=distance,
                    calories=calories,
                )
            )
            created += 1

    logger.info("Seeded demo workouts", user_id=user.id, workouts=created)
    return created


def main():
    setup_logging()
    if settings.storage_backend != "database":
        seed_demo_workouts(process_storage())
        return
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_demo_workouts(sql_storage(db))
    finally:
        db.close()


if __name__ == "__main__":
    main()
