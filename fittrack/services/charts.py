"""Reshape stored rows into chart-ready series."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from fittrack.models import BodyMeasurement, ProgressEntry


class Metric(str, Enum):
    weight = "weight"
    reps = "reps"
    sets = "sets"


METRIC_LABELS = {
    Metric.weight: "Weight (kg)",
    Metric.reps: "Reps",
    Metric.sets: "Sets",
}


@dataclass
class Series:
    label: str
    values: list[float | None]


@dataclass
class ProgressChart:
    label: str
    labels: list[str] = field(default_factory=list)
    values: list[float] = field(default_factory=list)


@dataclass
class MeasurementChart:
    labels: list[str] = field(default_factory=list)
    weight: list[float | None] = field(default_factory=list)
    series: list[Series] = field(default_factory=list)


def day_month_label(d: date) -> str:
    return f"{d.day}/{d.month}"


def progress_chart(entries: list[ProgressEntry], metric: Metric = Metric.weight) -> ProgressChart:
    """One point per entry, oldest first."""
    ordered = sorted(entries, key=lambda e: (e.date, e.id or 0))
    return ProgressChart(
        label=METRIC_LABELS[metric],
        labels=[day_month_label(e.date) for e in ordered],
        values=[getattr(e, metric.value) for e in ordered],
    )


def _arm(m: BodyMeasurement) -> float | None:
    return m.biceps_left if m.biceps_left is not None else m.biceps_right


def measurement_chart(measurements: list[BodyMeasurement]) -> MeasurementChart:
    """Weight line plus circumference lines for fields that were ever recorded."""
    ordered = sorted(measurements, key=lambda m: (m.date, m.id or 0))
    chart = MeasurementChart(
        labels=[day_month_label(m.date) for m in ordered],
        weight=[m.weight for m in ordered],
    )

    if any(m.waist is not None for m in ordered):
        chart.series.append(Series("Waist (cm)", [m.waist for m in ordered]))
    if any(m.hips is not None for m in ordered):
        chart.series.append(Series("Hips (cm)", [m.hips for m in ordered]))
    if any(_arm(m) is not None for m in ordered):
        chart.series.append(Series("Arm (cm)", [_arm(m) for m in ordered]))
    return chart
