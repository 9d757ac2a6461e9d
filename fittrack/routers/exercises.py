import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Field, Session, SQLModel, select

from fittrack.auth import AdminProfile, CurrentProfile
from fittrack.database import get_session
from fittrack.models import Exercise, ExerciseStatus, MuscleGroup, Profile
from fittrack.services.access import is_visible, visible_exercises_clause
from fittrack.services.cascade import delete_exercise_cascade

logger = logging.getLogger(__name__)

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class ExerciseRead(SQLModel):
    id: int
    name: str
    description: str
    muscle_group: MuscleGroup
    is_public: bool
    user_id: int | None
    status: ExerciseStatus


class ExerciseCreate(SQLModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=1000)
    muscle_group: MuscleGroup


class ExerciseUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    muscle_group: MuscleGroup | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_exercise_for(exercise_id: int, profile: Profile, session: Session) -> Exercise:
    exercise = session.get(Exercise, exercise_id)
    if exercise is None or not (profile.is_admin or is_visible(exercise, profile)):
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


def _decide(
    exercise_id: int, decision: ExerciseStatus, admin: Profile, session: Session
) -> Exercise:
    """Move a pending suggestion to a terminal state."""
    exercise = session.get(Exercise, exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    if exercise.status != ExerciseStatus.pending:
        raise HTTPException(
            status_code=409,
            detail=f"Exercise has already been {exercise.status.value}",
        )

    exercise.status = decision
    # Only approval publishes; a rejected suggestion stays with its author.
    exercise.is_public = decision == ExerciseStatus.approved
    session.add(exercise)
    session.commit()
    session.refresh(exercise)
    logger.info("Profile %s %s exercise %s", admin.id, decision.value, exercise.id)
    return exercise


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("", response_model=list[ExerciseRead])
def list_exercises(
    profile: CurrentProfile,
    session: SessionDep,
    muscle_group: MuscleGroup | None = None,
):
    statement = select(Exercise).where(visible_exercises_clause(profile))
    if muscle_group is not None:
        statement = statement.where(Exercise.muscle_group == muscle_group)
    return session.exec(statement.order_by(Exercise.name)).all()


@router.get("/pending", response_model=list[ExerciseRead])
def list_pending(admin: AdminProfile, session: SessionDep):
    return session.exec(
        select(Exercise)
        .where(Exercise.status == ExerciseStatus.pending)
        .order_by(Exercise.created_at, Exercise.id)
    ).all()


@router.post("", response_model=ExerciseRead, status_code=201)
def suggest_exercise(body: ExerciseCreate, profile: CurrentProfile, session: SessionDep):
    exercise = Exercise(
        name=body.name.strip(),
        description=body.description.strip(),
        muscle_group=body.muscle_group,
        is_public=False,
        user_id=profile.id,
        status=ExerciseStatus.pending,
    )
    session.add(exercise)
    session.commit()
    session.refresh(exercise)
    logger.info("Profile %s suggested exercise %s", profile.id, exercise.id)
    return exercise


@router.get("/{id}", response_model=ExerciseRead)
def get_exercise(id: int, profile: CurrentProfile, session: SessionDep):
    return _get_exercise_for(id, profile, session)


@router.patch("/{id}", response_model=ExerciseRead)
def update_exercise(id: int, body: ExerciseUpdate, profile: CurrentProfile, session: SessionDep):
    exercise = _get_exercise_for(id, profile, session)
    is_author = exercise.user_id == profile.id and exercise.status == ExerciseStatus.pending
    if not (profile.is_admin or is_author):
        raise HTTPException(status_code=403, detail="Only pending suggestions can be edited")

    if body.name is not None:
        exercise.name = body.name.strip()
    if body.description is not None:
        exercise.description = body.description.strip()
    if body.muscle_group is not None:
        exercise.muscle_group = body.muscle_group

    session.add(exercise)
    session.commit()
    session.refresh(exercise)
    return exercise


@router.delete("/{id}", status_code=204)
def delete_exercise(id: int, profile: CurrentProfile, session: SessionDep):
    exercise = _get_exercise_for(id, profile, session)
    is_author = exercise.user_id == profile.id and exercise.status != ExerciseStatus.approved
    if not (profile.is_admin or is_author):
        raise HTTPException(status_code=403, detail="Exercise cannot be deleted")
    delete_exercise_cascade(exercise, session)


@router.post("/{id}/approve", response_model=ExerciseRead)
def approve_exercise(id: int, admin: AdminProfile, session: SessionDep):
    return _decide(id, ExerciseStatus.approved, admin, session)


@router.post("/{id}/reject", response_model=ExerciseRead)
def reject_exercise(id: int, admin: AdminProfile, session: SessionDep):
    return _decide(id, ExerciseStatus.rejected, admin, session)
