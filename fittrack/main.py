import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fittrack.config import get_settings
from fittrack.database import build_engine, create_db_and_tables
from fittrack.errors import register_error_handlers
from fittrack.routers import (
    analytics,
    auth,
    bootstrap,
    exercises,
    measurements,
    progress,
    workout_exercises,
    workouts,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    engine = build_engine(settings)
    create_db_and_tables(engine)
    app.state.engine = engine
    logger.info("Database ready")
    yield
    engine.dispose()


app = FastAPI(title="FitTrack", lifespan=lifespan)
register_error_handlers(app)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(exercises.router, prefix="/api/exercises", tags=["exercises"])
app.include_router(workouts.router, prefix="/api/workouts", tags=["workouts"])
app.include_router(
    workout_exercises.router, prefix="/api/workout-exercises", tags=["workout-exercises"]
)
app.include_router(progress.router, prefix="/api/progress", tags=["progress"])
app.include_router(measurements.router, prefix="/api/measurements", tags=["measurements"])
app.include_router(analytics.router, prefix="/api/analytics", tags=["analytics"])
app.include_router(bootstrap.router, prefix="/api/setup", tags=["setup"])


@app.get("/api/health", include_in_schema=False)
def health():
    return {"status": "ok"}
