from fastapi import APIRouter, Depends, HTTPException

from fittracker.core.logging import get_logger
from fittracker.core.security import verify_password
from fittracker.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserRead
from fittracker.store.base import Storage
from fittracker.store.errors import DuplicateEmailError
from fittracker.store.factory import get_storage

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=201)
def signup(payload: SignupRequest, storage: Storage = Depends(get_storage)):
    try:
        user = storage.users.create(payload)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return AuthResponse(user=UserRead.model_validate(user.model_dump()))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, storage: Storage = Depends(get_storage)):
    user = storage.users.get_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info("Login rejected")
        raise HTTPException(status_code=401, detail="Invalid email or password")
    return AuthResponse(user=UserRead.model_validate(user.model_dump()))
