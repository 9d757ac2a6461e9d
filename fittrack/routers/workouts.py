import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Field, Session, SQLModel, select

from fittrack.auth import CurrentProfile
from fittrack.database import get_session
from fittrack.models import DAY_ORDER, DayOfWeek, Profile, Workout, WorkoutExercise
from fittrack.routers.workout_exercises import (
    WorkoutExerciseRead,
    build_workout_exercise_read,
    sanitize_notes,
)
from fittrack.services.access import get_owned_workout, verify_exercises_visible
from fittrack.services.cascade import delete_workout_cascade, delete_workout_children

logger = logging.getLogger(__name__)

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class WorkoutRead(SQLModel):
    id: int
    user_id: int
    name: str
    description: str
    day_of_week: DayOfWeek
    is_active: bool
    exercises: list[WorkoutExerciseRead]


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class WorkoutExerciseInput(SQLModel):
    exercise_id: int
    sets: int = Field(ge=1, le=20)
    reps: int = Field(ge=1, le=100)
    rest_time: int = Field(default=60, ge=0, le=600)
    order_number: int | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=500)


class WorkoutCreate(SQLModel):
    name: str = Field(min_length=1, max_length=100)
    day_of_week: DayOfWeek
    description: str = Field(default="", max_length=1000)
    is_active: bool = True
    exercises: list[WorkoutExerciseInput] = Field(default_factory=list)


class WorkoutUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    day_of_week: DayOfWeek | None = None
    description: str | None = Field(default=None, max_length=1000)
    is_active: bool | None = None
    exercises: list[WorkoutExerciseInput] | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_workout_read(workout: Workout, session: Session) -> WorkoutRead:
    workout_exercises = session.exec(
        select(WorkoutExercise)
        .where(WorkoutExercise.workout_id == workout.id)
        .order_by(WorkoutExercise.order_number, WorkoutExercise.id)
    ).all()
    return WorkoutRead(
        id=workout.id,
        user_id=workout.user_id,
        name=workout.name,
        description=workout.description,
        day_of_week=workout.day_of_week,
        is_active=workout.is_active,
        exercises=[build_workout_exercise_read(we, session) for we in workout_exercises],
    )


def _insert_children(workout_id: int, items: list[WorkoutExerciseInput], session: Session) -> None:
    """Batch-insert the child rows. The already committed parent is kept on failure."""
    if not items:
        return
    try:
        for index, item in enumerate(items):
            session.add(
                WorkoutExercise(
                    workout_id=workout_id,
                    exercise_id=item.exercise_id,
                    sets=item.sets,
                    reps=item.reps,
                    rest_time=item.rest_time,
                    order_number=item.order_number if item.order_number is not None else index,
                    notes=sanitize_notes(item.notes),
                )
            )
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Child insert failed for workout %s; parent kept", workout_id)
        raise


def _verify_items(items: list[WorkoutExerciseInput], profile: Profile, session: Session) -> None:
    verify_exercises_visible([item.exercise_id for item in items], profile, session)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("", response_model=list[WorkoutRead])
def list_workouts(profile: CurrentProfile, session: SessionDep):
    workouts = session.exec(select(Workout).where(Workout.user_id == profile.id)).all()
    workouts = sorted(workouts, key=lambda w: (DAY_ORDER[DayOfWeek(w.day_of_week)], w.name, w.id))
    return [_build_workout_read(workout, session) for workout in workouts]


@router.post("", response_model=WorkoutRead, status_code=201)
def create_workout(body: WorkoutCreate, profile: CurrentProfile, session: SessionDep):
    _verify_items(body.exercises, profile, session)

    workout = Workout(
        user_id=profile.id,
        name=body.name.strip(),
        description=body.description.strip(),
        day_of_week=body.day_of_week,
        is_active=body.is_active,
    )
    session.add(workout)
    session.commit()
    session.refresh(workout)

    _insert_children(workout.id, body.exercises, session)
    return _build_workout_read(workout, session)


@router.get("/{id}", response_model=WorkoutRead)
def get_workout(id: int, profile: CurrentProfile, session: SessionDep):
    workout = get_owned_workout(id, profile, session)
    return _build_workout_read(workout, session)


@router.put("/{id}", response_model=WorkoutRead)
def update_workout(id: int, body: WorkoutUpdate, profile: CurrentProfile, session: SessionDep):
    workout = get_owned_workout(id, profile, session)
    if body.exercises is not None:
        _verify_items(body.exercises, profile, session)

    if body.name is not None:
        workout.name = body.name.strip()
    if body.day_of_week is not None:
        workout.day_of_week = body.day_of_week
    if body.description is not None:
        workout.description = body.description.strip()
    if body.is_active is not None:
        workout.is_active = body.is_active
    session.add(workout)
    session.commit()
    session.refresh(workout)

    if body.exercises is not None:
        # Replace, not merge: the old rows and their progress go away.
        delete_workout_children(workout.id, session)
        _insert_children(workout.id, body.exercises, session)

    return _build_workout_read(workout, session)


@router.delete("/{id}", status_code=204)
def delete_workout(id: int, profile: CurrentProfile, session: SessionDep):
    workout = get_owned_workout(id, profile, session)
    delete_workout_cascade(workout, session)
