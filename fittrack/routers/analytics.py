from typing import Annotated

from fastapi import APIRouter, Depends
from sqlmodel import Session, SQLModel, select

from fittrack.auth import CurrentProfile
from fittrack.database import get_session
from fittrack.models import BodyMeasurement, ProgressEntry
from fittrack.services.access import get_owned_workout_exercise
from fittrack.services.charts import Metric, measurement_chart, progress_chart

router = APIRouter()

SessionDep = Annotated[Session, Depends(get_session)]


class ProgressChartRead(SQLModel):
    label: str
    labels: list[str]
    values: list[float]


class SeriesRead(SQLModel):
    label: str
    values: list[float | None]


class MeasurementChartRead(SQLModel):
    labels: list[str]
    weight: list[float | None]
    series: list[SeriesRead]


@router.get("/progress/{workout_exercise_id}", response_model=ProgressChartRead)
def get_progress_chart(
    workout_exercise_id: int,
    profile: CurrentProfile,
    session: SessionDep,
    metric: Metric = Metric.weight,
):
    get_owned_workout_exercise(workout_exercise_id, profile, session)
    entries = session.exec(
        select(ProgressEntry).where(
            ProgressEntry.workout_exercise_id == workout_exercise_id,
            ProgressEntry.user_id == profile.id,
        )
    ).all()
    chart = progress_chart(list(entries), metric)
    return ProgressChartRead(label=chart.label, labels=chart.labels, values=chart.values)


@router.get("/measurements", response_model=MeasurementChartRead)
def get_measurement_chart(profile: CurrentProfile, session: SessionDep):
    measurements = session.exec(
        select(BodyMeasurement).where(BodyMeasurement.user_id == profile.id)
    ).all()
    chart = measurement_chart(list(measurements))
    return MeasurementChartRead(
        labels=chart.labels,
        weight=chart.weight,
        series=[SeriesRead(label=s.label, values=s.values) for s in chart.series],
    )
