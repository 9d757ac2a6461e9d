import datetime as dt
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Field, Session, SQLModel, select

from fittrack.auth import CurrentProfile
from fittrack.database import get_session
from fittrack.models import BodyMeasurement, Profile
from fittrack.routers.workout_exercises import sanitize_notes

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]

MEASUREMENT_FIELDS = (
    "weight",
    "height",
    "chest",
    "waist",
    "hips",
    "shoulders",
    "biceps_left",
    "biceps_right",
    "thigh_left",
    "thigh_right",
    "calf_left",
    "calf_right",
)


class MeasurementRead(SQLModel):
    id: int
    user_id: int
    date: dt.date
    weight: float | None
    height: float | None
    chest: float | None
    waist: float | None
    hips: float | None
    shoulders: float | None
    biceps_left: float | None
    biceps_right: float | None
    thigh_left: float | None
    thigh_right: float | None
    calf_left: float | None
    calf_right: float | None
    notes: str | None


class MeasurementWrite(SQLModel):
    date: dt.date | None = None
    weight: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)
    chest: float | None = Field(default=None, ge=0)
    waist: float | None = Field(default=None, ge=0)
    hips: float | None = Field(default=None, ge=0)
    shoulders: float | None = Field(default=None, ge=0)
    biceps_left: float | None = Field(default=None, ge=0)
    biceps_right: float | None = Field(default=None, ge=0)
    thigh_left: float | None = Field(default=None, ge=0)
    thigh_right: float | None = Field(default=None, ge=0)
    calf_left: float | None = Field(default=None, ge=0)
    calf_right: float | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=500)


def _get_own_measurement(
    measurement_id: int, profile: Profile, session: Session
) -> BodyMeasurement:
    measurement = session.get(BodyMeasurement, measurement_id)
    if measurement is None or measurement.user_id != profile.id:
        raise HTTPException(status_code=404, detail="Measurement not found")
    return measurement


@router.get("", response_model=list[MeasurementRead])
def list_measurements(profile: CurrentProfile, session: SessionDep):
    return session.exec(
        select(BodyMeasurement)
        .where(BodyMeasurement.user_id == profile.id)
        .order_by(BodyMeasurement.date.desc(), BodyMeasurement.id.desc())
    ).all()


@router.post("", response_model=MeasurementRead, status_code=201)
def create_measurement(body: MeasurementWrite, profile: CurrentProfile, session: SessionDep):
    measurement = BodyMeasurement(
        user_id=profile.id,
        date=body.date or dt.date.today(),
        notes=sanitize_notes(body.notes),
        **{name: getattr(body, name) for name in MEASUREMENT_FIELDS},
    )
    session.add(measurement)
    session.commit()
    session.refresh(measurement)
    return measurement


@router.get("/{id}", response_model=MeasurementRead)
def get_measurement(id: int, profile: CurrentProfile, session: SessionDep):
    return _get_own_measurement(id, profile, session)


@router.put("/{id}", response_model=MeasurementRead)
def update_measurement(
    id: int, body: MeasurementWrite, profile: CurrentProfile, session: SessionDep
):
    """Overwrite only the fields present in the request body."""
    measurement = _get_own_measurement(id, profile, session)
    changes = body.model_dump(exclude_unset=True)

    if changes.get("date") is not None:
        measurement.date = changes["date"]
    if "notes" in changes:
        measurement.notes = sanitize_notes(changes["notes"])
    for name in MEASUREMENT_FIELDS:
        if name in changes:
            setattr(measurement, name, changes[name])

    session.add(measurement)
    session.commit()
    session.refresh(measurement)
    return measurement


@router.delete("/{id}", status_code=204)
def delete_measurement(id: int, profile: CurrentProfile, session: SessionDep):
    measurement = _get_own_measurement(id, profile, session)
    session.delete(measurement)
    session.commit()
