import os

# Settings are read at import time, so configure before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("STORAGE_BACKEND", "database")
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")

from datetime import datetime, timezone  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from fittracker.db import Base, make_engine  # noqa: E402
from fittracker.schemas.user import SignupRequest  # noqa: E402
from fittracker.schemas.workout import WorkoutCreate, WorkoutRead  # noqa: E402
from fittracker.store.factory import file_storage, memory_storage, sql_storage  # noqa: E402

BACKENDS = ["memory", "file", "database"]


@pytest.fixture(params=BACKENDS)
def storage(request, tmp_path):
    """A fresh, empty Storage for each backend."""
    if request.param == "memory":
        yield memory_storage()
    elif request.param == "file":
        yield file_storage(str(tmp_path / "store.json"))
    else:
        engine = make_engine("sqlite+pysqlite:///:memory:")
        Base.metadata.create_all(bind=engine)
        db = Session(engine)
        try:
            yield sql_storage(db)
        finally:
            db.close()
            engine.dispose()


@pytest.fixture
def client(storage):
    """TestClient wired to the parametrized storage backend."""
    from fastapi.testclient import TestClient
    from fittracker.main import app
    from fittracker.store.factory import get_storage

    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def signup_payload(**overrides):
    data = {
        "email": "ana@example.com",
        "password": "secret123",
        "first_name": "Ana",
        "last_name": "Runner",
    }
    data.update(overrides)
    return data


def workout_payload(user_id, **overrides):
    data = {
        "user_id": user_id,
        "type": "running",
        "name": "Morning run",
        "date": "2024-06-01",
        "time": "07:30",
        "duration": 30,
        "distance": 3.0,
        "calories": 300,
        "notes": "felt good",
    }
    data.update(overrides)
    return data


def make_user(storage, **overrides):
    return storage.users.create(SignupRequest(**signup_payload(**overrides)))


def make_workout(storage, user_id, **overrides):
    return storage.workouts.create(WorkoutCreate(**workout_payload(user_id, **overrides)))


def workout(**overrides) -> WorkoutRead:
    """A stored-looking workout for the pure stats functions."""
    data = {
        "id": 1,
        "user_id": 1,
        "type": "running",
        "date": "2024-06-01",
        "time": "07:00",
        "duration": 30,
        "created_at": datetime(2024, 6, 1, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return WorkoutRead(**data)
