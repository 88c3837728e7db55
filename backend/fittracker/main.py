from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fittracker.api.auth import router as auth_router
from fittracker.api.users import router as users_router
from fittracker.api.workouts import router as workouts_router
from fittracker.api.stats import router as stats_router
from fittracker.db import Base, engine
from fittracker.models.user import User  # noqa: F401  (import ensures table is registered)
from fittracker.models.workout import Workout  # noqa: F401
from fittracker.core.config import settings
from fittracker.core.logging import get_logger, setup_logging
from fittracker.store.errors import StorageError

setup_logging()
logger = get_logger(__name__)

app = FastAPI(title="FitTracker")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables (users, workouts) on startup
if settings.storage_backend == "database":
    Base.metadata.create_all(bind=engine)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(workouts_router)
app.include_router(stats_router)


@app.exception_handler(StorageError)
def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def root():
    return {"message": "FitTracker backend is running", "storage": settings.storage_backend}
