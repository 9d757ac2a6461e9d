import logging
import re
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Field, Session, SQLModel

from fittrack.auth import CurrentProfile
from fittrack.database import get_session
from fittrack.models import Exercise, MuscleGroup, WorkoutExercise
from fittrack.services.access import get_owned_workout_exercise, verify_exercises_visible
from fittrack.services.cascade import delete_workout_exercises

logger = logging.getLogger(__name__)

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]

_UNSAFE_CHARS = re.compile(r"[<>\"'&]")


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class ExerciseSummary(SQLModel):
    id: int
    name: str
    muscle_group: MuscleGroup


class WorkoutExerciseRead(SQLModel):
    id: int
    workout_id: int
    exercise_id: int
    exercise: ExerciseSummary | None
    sets: int
    reps: int
    rest_time: int
    order_number: int
    notes: str | None


class WorkoutExerciseUpdate(SQLModel):
    sets: int = Field(ge=1, le=20)
    reps: int = Field(ge=1, le=100)
    rest_time: int = Field(ge=0, le=600)
    exercise_id: int | None = None
    order_number: int | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=500)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def sanitize_notes(notes: str | None) -> str | None:
    """Strip markup characters from free text; blank becomes None."""
    if notes is None:
        return None
    cleaned = _UNSAFE_CHARS.sub("", notes).strip()
    return cleaned or None


def build_workout_exercise_read(we: WorkoutExercise, session: Session) -> WorkoutExerciseRead:
    exercise = session.get(Exercise, we.exercise_id)
    return WorkoutExerciseRead(
        id=we.id,
        workout_id=we.workout_id,
        exercise_id=we.exercise_id,
        exercise=ExerciseSummary(
            id=exercise.id,
            name=exercise.name,
            muscle_group=exercise.muscle_group,
        )
        if exercise
        else None,
        sets=we.sets,
        reps=we.reps,
        rest_time=we.rest_time,
        order_number=we.order_number,
        notes=we.notes,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/{id}", response_model=WorkoutExerciseRead)
def get_workout_exercise(id: int, profile: CurrentProfile, session: SessionDep):
    we = get_owned_workout_exercise(id, profile, session)
    return build_workout_exercise_read(we, session)


@router.put("/{id}", response_model=WorkoutExerciseRead)
def update_workout_exercise(
    id: int, body: WorkoutExerciseUpdate, profile: CurrentProfile, session: SessionDep
):
    we = get_owned_workout_exercise(id, profile, session)
    if body.exercise_id is not None:
        verify_exercises_visible([body.exercise_id], profile, session)
        we.exercise_id = body.exercise_id

    we.sets = body.sets
    we.reps = body.reps
    we.rest_time = body.rest_time
    if body.order_number is not None:
        we.order_number = body.order_number
    if "notes" in body.model_dump(exclude_unset=True):
        we.notes = sanitize_notes(body.notes)

    session.add(we)
    session.commit()
    session.refresh(we)
    return build_workout_exercise_read(we, session)


@router.delete("/{id}", status_code=204)
def delete_workout_exercise(id: int, profile: CurrentProfile, session: SessionDep):
    we = get_owned_workout_exercise(id, profile, session)
    delete_workout_exercises([we], session)
    logger.info("Deleted workout exercise %s", id)
