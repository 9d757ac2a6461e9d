from datetime import date, datetime, timezone
from enum import Enum

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a timestamp SQLite handed back without an offset."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MuscleGroup(str, Enum):
    chest = "chest"
    back = "back"
    shoulders = "shoulders"
    biceps = "biceps"
    triceps = "triceps"
    legs = "legs"
    glutes = "glutes"
    abs = "abs"
    cardio = "cardio"
    full_body = "full_body"
    other = "other"


class DayOfWeek(str, Enum):
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"


DAY_ORDER = {day: i for i, day in enumerate(DayOfWeek)}


class ExerciseStatus(str, Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class Profile(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    display_name: str = ""
    password_hash: str
    is_admin: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class AuthSession(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    profile_id: int = Field(foreign_key="profile.id", index=True)
    token_hash: str = Field(index=True, unique=True)
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime


class Exercise(SQLModel, table=True):
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    description: str = ""
    muscle_group: MuscleGroup
    is_public: bool = False
    user_id: int | None = Field(default=None, foreign_key="profile.id")
    status: ExerciseStatus = ExerciseStatus.pending
    created_at: datetime = Field(default_factory=utcnow)


class Workout(SQLModel, table=True):
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="profile.id", index=True)
    name: str
    description: str = ""
    day_of_week: DayOfWeek
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)


class WorkoutExercise(SQLModel, table=True):
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    workout_id: int = Field(foreign_key="workout.id", index=True)
    exercise_id: int = Field(foreign_key="exercise.id")
    sets: int
    reps: int
    rest_time: int = 60  # seconds
    order_number: int = 0
    notes: str | None = None


class ProgressEntry(SQLModel, table=True):
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="profile.id", index=True)
    workout_exercise_id: int = Field(foreign_key="workoutexercise.id", index=True)
    date: date
    weight: float  # stored in kg
    reps: int
    sets: int
    rpe: int | None = None  # 1-10
    notes: str | None = None
    created_at: datetime = Field(default_factory=utcnow)


class BodyMeasurement(SQLModel, table=True):
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="profile.id", index=True)
    date: date
    weight: float | None = None  # kg
    height: float | None = None  # cm
    # Circumferences, all in cm
    chest: float | None = None
    waist: float | None = None
    hips: float | None = None
    shoulders: float | None = None
    biceps_left: float | None = None
    biceps_right: float | None = None
    thigh_left: float | None = None
    thigh_right: float | None = None
    calf_left: float | None = None
    calf_right: float | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
