"""
Seed the database with the default exercise catalogue.
Run with: python -m fittrack.seed

Safe to run repeatedly: nothing is inserted once any exercise exists.
"""

import logging

from sqlalchemy import func
from sqlmodel import Session, select

from fittrack.models import Exercise, ExerciseStatus, MuscleGroup

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exercise catalogue
# ---------------------------------------------------------------------------

DEFAULT_EXERCISES: dict[MuscleGroup, list[tuple[str, str]]] = {
    MuscleGroup.chest: [
        ("Bench Press", "Barbell press lying on a flat bench."),
        ("Incline Dumbbell Press", "Dumbbell press on a 30-45 degree bench."),
        ("Cable Fly", "Standing fly between two high pulleys."),
        ("Push-up", "Bodyweight press from the floor."),
    ],
    MuscleGroup.back: [
        ("Pull-up", "Overhand grip, chin over the bar."),
        ("Barbell Row", "Bent-over row to the lower chest."),
        ("Lat Pulldown", "Wide-grip pulldown to the upper chest."),
        ("Seated Cable Row", "Neutral-grip row on a cable station."),
    ],
    MuscleGroup.shoulders: [
        ("Overhead Press", "Standing barbell press overhead."),
        ("Lateral Raise", "Dumbbell raise to shoulder height."),
        ("Face Pull", "Rope pull towards the face on a cable."),
    ],
    MuscleGroup.biceps: [
        ("Barbell Curl", "Standing curl with a straight bar."),
        ("Hammer Curl", "Neutral-grip dumbbell curl."),
    ],
    MuscleGroup.triceps: [
        ("Tricep Pushdown", "Cable pushdown with a bar or rope."),
        ("Skull Crusher", "Lying extension with an EZ bar."),
        ("Bench Dip", "Bodyweight dip between two benches."),
    ],
    MuscleGroup.legs: [
        ("Squat", "Back squat to parallel or below."),
        ("Leg Press", "Machine press on a 45 degree sled."),
        ("Romanian Deadlift", "Hip hinge with a slight knee bend."),
        ("Leg Curl", "Machine hamstring curl."),
        ("Standing Calf Raise", "Calf raise on a machine or step."),
    ],
    MuscleGroup.glutes: [
        ("Hip Thrust", "Barbell hip extension with the back on a bench."),
        ("Bulgarian Split Squat", "Rear-foot-elevated split squat."),
    ],
    MuscleGroup.abs: [
        ("Plank", "Front plank held on the forearms."),
        ("Hanging Leg Raise", "Raise straight legs while hanging from a bar."),
        ("Crunch", "Floor crunch."),
    ],
    MuscleGroup.cardio: [
        ("Treadmill Run", "Steady run on a treadmill."),
        ("Rowing Machine", "Indoor rowing."),
        ("Jump Rope", "Continuous rope skipping."),
    ],
    MuscleGroup.full_body: [
        ("Deadlift", "Conventional barbell deadlift from the floor."),
        ("Burpee", "Squat thrust with a jump."),
        ("Kettlebell Swing", "Two-handed hip-driven swing."),
    ],
    MuscleGroup.other: [
        ("Farmer's Walk", "Walk carrying heavy weights at the sides."),
    ],
}


def seed_default_exercises(session: Session) -> int:
    """Insert the catalogue as public, approved exercises if the table is empty.

    Returns the number of rows inserted (0 when the table already had rows).
    """
    existing = session.exec(select(func.count()).select_from(Exercise)).one()
    if existing:
        logger.info("Exercise table already has %d rows; skipping seed", existing)
        return 0

    count = 0
    for muscle_group, exercises in DEFAULT_EXERCISES.items():
        for name, description in exercises:
            session.add(
                Exercise(
                    name=name,
                    description=description,
                    muscle_group=muscle_group,
                    is_public=True,
                    user_id=None,
                    status=ExerciseStatus.approved,
                )
            )
            count += 1
    session.commit()
    logger.info("Seeded %d default exercises", count)
    return count


def seed() -> None:
    from fittrack.config import get_settings
    from fittrack.database import build_engine, create_db_and_tables

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
    engine = build_engine(get_settings())
    create_db_and_tables(engine)
    with Session(engine) as session:
        inserted = seed_default_exercises(session)
    print(f"Seed complete: {inserted} exercises inserted.")


if __name__ == "__main__":
    seed()
