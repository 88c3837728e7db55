from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from fittracker.core.constants import WorkoutType
from fittracker.schemas.workout import WorkoutCreate, WorkoutRead, WorkoutUpdate
from fittracker.store.base import Storage
from fittracker.store.errors import NotFoundError
from fittracker.store.factory import get_storage

router = APIRouter(prefix="/api/workouts", tags=["workouts"])


@router.get("/user/{user_id}", response_model=list[WorkoutRead])
def list_workouts(
    user_id: int,
    workout_type: Optional[WorkoutType] = Query(None, alias="type"),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    storage: Storage = Depends(get_storage),
):
    """
    List a user's workouts, most recent first, optionally filtered by
    type and by [date_from, date_to].

    This is what the workouts page will call:
      GET /api/workouts/user/1?type=running&date_from=2025-01-01
    """
    workouts = storage.workouts.list_by_user(user_id)

    if workout_type is not None:
        workouts = [w for w in workouts if w.type == workout_type]
    # Dates are 'YYYY-MM-DD' so string comparison is chronological
    if date_from is not None:
        workouts = [w for w in workouts if w.date >= date_from.isoformat()]
    if date_to is not None:
        workouts = [w for w in workouts if w.date <= date_to.isoformat()]

    return workouts


@router.get("/{workout_id}", response_model=WorkoutRead)
def get_workout(workout_id: int, storage: Storage = Depends(get_storage)):
    try:
        return storage.workouts.get(workout_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Workout not found")


@router.post("", response_model=WorkoutRead, status_code=201)
def create_workout(payload: WorkoutCreate, storage: Storage = Depends(get_storage)):
    try:
        storage.users.get(payload.user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return storage.workouts.create(payload)


@router.put("/{workout_id}", response_model=WorkoutRead)
def update_workout(workout_id: int, payload: WorkoutUpdate, storage: Storage = Depends(get_storage)):
    try:
        return storage.workouts.update(workout_id, payload.changes())
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Workout not found")


@router.delete("/{workout_id}", status_code=204)
def delete_workout(workout_id: int, storage: Storage = Depends(get_storage)):
    try:
        storage.workouts.delete(workout_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Workout not found")
    return Response(status_code=204)
