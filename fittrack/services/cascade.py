"""Child-before-parent deletes.

Each step is its own commit. When a step fails it is rolled back and the
error propagates, so the following (parent) step never runs.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from fittrack.models import Exercise, ProgressEntry, Workout, WorkoutExercise

logger = logging.getLogger(__name__)


def _commit_deletes(rows: list, session: Session) -> int:
    try:
        for row in rows:
            session.delete(row)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    return len(rows)


def delete_progress_for(workout_exercise_ids: list[int], session: Session) -> int:
    """Delete every ProgressEntry hanging off the given WorkoutExercises."""
    if not workout_exercise_ids:
        return 0
    entries = session.exec(
        select(ProgressEntry).where(ProgressEntry.workout_exercise_id.in_(workout_exercise_ids))
    ).all()
    return _commit_deletes(list(entries), session)


def delete_workout_exercises(workout_exercises: list[WorkoutExercise], session: Session) -> int:
    """Delete ProgressEntries, then the WorkoutExercises themselves."""
    delete_progress_for([we.id for we in workout_exercises], session)
    return _commit_deletes(list(workout_exercises), session)


def delete_workout_children(workout_id: int, session: Session) -> int:
    workout_exercises = session.exec(
        select(WorkoutExercise).where(WorkoutExercise.workout_id == workout_id)
    ).all()
    return delete_workout_exercises(list(workout_exercises), session)


def delete_workout_cascade(workout: Workout, session: Session) -> None:
    """Delete ProgressEntries -> WorkoutExercises -> Workout."""
    removed = delete_workout_children(workout.id, session)
    _commit_deletes([workout], session)
    logger.info("Deleted workout %s with %d exercises", workout.id, removed)


def delete_exercise_cascade(exercise: Exercise, session: Session) -> None:
    """Delete everything referencing an Exercise, then the Exercise."""
    workout_exercises = session.exec(
        select(WorkoutExercise).where(WorkoutExercise.exercise_id == exercise.id)
    ).all()
    removed = delete_workout_exercises(list(workout_exercises), session)
    _commit_deletes([exercise], session)
    logger.info("Deleted exercise %s and %d workout references", exercise.id, removed)
