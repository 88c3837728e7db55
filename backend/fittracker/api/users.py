from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from fittracker.schemas.stats import DataExport
from fittracker.schemas.user import UserRead, UserUpdate
from fittracker.store.base import Storage
from fittracker.store.errors import DuplicateEmailError, NotFoundError
from fittracker.store.factory import get_storage


router = APIRouter(prefix="/api/user", tags=["users"])


def _public(user) -> UserRead:
    return UserRead.model_validate(user.model_dump())


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, storage: Storage = Depends(get_storage)):
    try:
        return _public(storage.users.get(user_id))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")


@router.put("/{user_id}", response_model=UserRead)
def update_user(user_id: int, payload: UserUpdate, storage: Storage = Depends(get_storage)):
    try:
        user = storage.users.update(user_id, payload.changes())
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except DuplicateEmailError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _public(user)


@router.get("/{user_id}/export", response_model=DataExport)
def export_user_data(user_id: int, storage: Storage = Depends(get_storage)):
    """Everything we hold for a user: profile plus all workouts."""
    try:
        user = storage.users.get(user_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return DataExport(
        user=_public(user),
        workouts=storage.workouts.list_by_user(user_id),
        export_date=datetime.now(timezone.utc),
    )
