from functools import lru_cache
from typing import Iterator

from fittracker.core.config import settings
from fittracker.db import SessionLocal
from fittracker.store.base import Storage
from fittracker.store.file import FileUserStore, FileWorkoutStore
from fittracker.store.kv import JsonKeyValueStore
from fittracker.store.memory import MemoryUserStore, MemoryWorkoutStore
from fittracker.store.sql import SqlUserStore, SqlWorkoutStore


def memory_storage() -> Storage:
    return Storage(users=MemoryUserStore(), workouts=MemoryWorkoutStore())


def file_storage(path: str) -> Storage:
    kv = JsonKeyValueStore(path)
    return Storage(users=FileUserStore(kv), workouts=FileWorkoutStore(kv))


def sql_storage(db) -> Storage:
    return Storage(users=SqlUserStore(db), workouts=SqlWorkoutStore(db))


@lru_cache
def process_storage() -> Storage:
    """Shared storage for the backends that live outside a DB session."""
    if settings.storage_backend == "file":
        return file_storage(settings.store_path)
    return memory_storage()


# Dependency we will use in FastAPI routes
def get_storage() -> Iterator[Storage]:
    if settings.storage_backend != "database":
        yield process_storage()
        return
    db = SessionLocal()
    try:
        yield sql_storage(db)
    finally:
        db.close()
