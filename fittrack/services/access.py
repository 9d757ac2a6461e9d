from fastapi import HTTPException
from sqlmodel import Session, or_, select

from fittrack.models import Exercise, Profile, Workout, WorkoutExercise


def visible_exercises_clause(profile: Profile):
    """Public exercises plus the caller's own suggestions."""
    return or_(Exercise.is_public == True, Exercise.user_id == profile.id)  # noqa: E712


def is_visible(exercise: Exercise, profile: Profile) -> bool:
    return exercise.is_public or exercise.user_id == profile.id


def get_visible_exercise(exercise_id: int, profile: Profile, session: Session) -> Exercise:
    exercise = session.get(Exercise, exercise_id)
    if exercise is None or not is_visible(exercise, profile):
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


def verify_exercises_visible(exercise_ids: list[int], profile: Profile, session: Session) -> None:
    for exercise_id in set(exercise_ids):
        exercise = session.get(Exercise, exercise_id)
        if exercise is None or not is_visible(exercise, profile):
            raise HTTPException(
                status_code=400,
                detail=f"Exercise with id {exercise_id} does not exist",
            )


def get_owned_workout(workout_id: int, profile: Profile, session: Session) -> Workout:
    workout = session.get(Workout, workout_id)
    if workout is None or workout.user_id != profile.id:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


def get_owned_workout_exercise(
    workout_exercise_id: int, profile: Profile, session: Session
) -> WorkoutExercise:
    """Return the WorkoutExercise if its parent Workout belongs to ``profile``."""
    we = session.exec(
        select(WorkoutExercise)
        .join(Workout, Workout.id == WorkoutExercise.workout_id)
        .where(WorkoutExercise.id == workout_exercise_id, Workout.user_id == profile.id)
    ).first()
    if we is None:
        raise HTTPException(status_code=404, detail="Workout exercise not found")
    return we
