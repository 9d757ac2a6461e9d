import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Field, Session, SQLModel, select

from fittrack.auth import CurrentProfile
from fittrack.database import get_session
from fittrack.models import Profile, ProgressEntry, WorkoutExercise
from fittrack.routers.workout_exercises import sanitize_notes
from fittrack.services.access import get_owned_workout_exercise
from fittrack.services.progression import Technique, suggest, technique_to_rpe

logger = logging.getLogger(__name__)

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class ProgressRead(SQLModel):
    id: int
    user_id: int
    workout_exercise_id: int
    date: date
    weight: float
    reps: int
    sets: int
    rpe: int | None
    notes: str | None


class ProgressCreate(SQLModel):
    workout_exercise_id: int
    weight: float = Field(gt=0)
    reps: int = Field(ge=1, le=100)
    sets: int = Field(ge=1, le=20)
    technique: Technique = Technique.regular
    notes: str | None = Field(default=None, max_length=500)


class ProgressUpdate(SQLModel):
    weight: float | None = Field(default=None, ge=0)
    reps: int | None = Field(default=None, ge=1, le=100)
    sets: int | None = Field(default=None, ge=1, le=20)
    rpe: int | None = Field(default=None, ge=1, le=10)
    notes: str | None = Field(default=None, max_length=500)


class SuggestionRead(SQLModel):
    weight: float
    reps: int
    has_suggestion: bool


class LastProgressRead(SQLModel):
    entry: ProgressRead | None
    suggestion: SuggestionRead | None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_own_entry(entry_id: int, profile: Profile, session: Session) -> ProgressEntry:
    entry = session.get(ProgressEntry, entry_id)
    if entry is None or entry.user_id != profile.id:
        raise HTTPException(status_code=404, detail="Progress entry not found")
    return entry


def _latest_entry(
    workout_exercise_id: int, profile: Profile, session: Session
) -> ProgressEntry | None:
    return session.exec(
        select(ProgressEntry)
        .where(
            ProgressEntry.workout_exercise_id == workout_exercise_id,
            ProgressEntry.user_id == profile.id,
        )
        .order_by(ProgressEntry.date.desc(), ProgressEntry.id.desc())
    ).first()


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("", response_model=list[ProgressRead])
def list_progress(
    profile: CurrentProfile,
    session: SessionDep,
    workout_exercise_id: int | None = None,
    exercise_id: int | None = None,
):
    statement = select(ProgressEntry).where(ProgressEntry.user_id == profile.id)
    if workout_exercise_id is not None:
        statement = statement.where(ProgressEntry.workout_exercise_id == workout_exercise_id)
    if exercise_id is not None:
        statement = statement.join(
            WorkoutExercise, WorkoutExercise.id == ProgressEntry.workout_exercise_id
        ).where(WorkoutExercise.exercise_id == exercise_id)
    return session.exec(
        statement.order_by(ProgressEntry.date.desc(), ProgressEntry.id.desc())
    ).all()


@router.get("/last", response_model=LastProgressRead)
def get_last_progress(workout_exercise_id: int, profile: CurrentProfile, session: SessionDep):
    """Return the most recent entry for a workout exercise and the next-session target."""
    get_owned_workout_exercise(workout_exercise_id, profile, session)
    entry = _latest_entry(workout_exercise_id, profile, session)
    if entry is None:
        return LastProgressRead(entry=None, suggestion=None)

    suggestion = suggest(entry.weight, entry.reps, entry.rpe)
    return LastProgressRead(
        entry=ProgressRead.model_validate(entry, from_attributes=True),
        suggestion=SuggestionRead(
            weight=suggestion.weight,
            reps=suggestion.reps,
            has_suggestion=suggestion.differs_from(entry.weight, entry.reps),
        ),
    )


@router.post("", response_model=ProgressRead, status_code=201)
def record_progress(body: ProgressCreate, profile: CurrentProfile, session: SessionDep):
    get_owned_workout_exercise(body.workout_exercise_id, profile, session)

    entry = ProgressEntry(
        user_id=profile.id,
        workout_exercise_id=body.workout_exercise_id,
        date=date.today(),
        weight=body.weight,
        reps=body.reps,
        sets=body.sets,
        rpe=technique_to_rpe(body.technique),
        notes=sanitize_notes(body.notes),
    )
    session.add(entry)
    session.commit()
    session.refresh(entry)
    return entry


@router.put("/{id}", response_model=ProgressRead)
def update_progress(id: int, body: ProgressUpdate, profile: CurrentProfile, session: SessionDep):
    entry = _get_own_entry(id, profile, session)

    if body.weight is not None:
        entry.weight = body.weight
    if body.reps is not None:
        entry.reps = body.reps
    if body.sets is not None:
        entry.sets = body.sets
    if body.rpe is not None:
        entry.rpe = body.rpe
    if body.notes is not None:
        entry.notes = sanitize_notes(body.notes)

    session.add(entry)
    session.commit()
    session.refresh(entry)
    return entry


@router.delete("/{id}", status_code=204)
def delete_progress(id: int, profile: CurrentProfile, session: SessionDep):
    entry = _get_own_entry(id, profile, session)
    session.delete(entry)
    session.commit()
