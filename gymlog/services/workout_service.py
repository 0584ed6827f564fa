import datetime as dt
from collections.abc import Iterable, Mapping

import pydantic
import structlog
from sqlalchemy import Select, delete, func, select

from gymlog.core.db import Store
from gymlog.core.errors import ExerciseNotFoundError, ValidationError, WorkoutNotFoundError
from gymlog.models.exercise import Exercise
from gymlog.models.workout import Workout
from gymlog.models.workout_exercise import WorkoutExercise
from gymlog.schemas.workouts import (
    WorkoutDetailOut,
    WorkoutExerciseIn,
    WorkoutExerciseOut,
    WorkoutListItem,
    WorkoutOut,
)

logger = structlog.get_logger(__name__)


def workouts_with_counts() -> Select:
    """Workouts joined with the number of exercise entries each one has, newest first."""
    return (
        select(Workout, func.count(WorkoutExercise.id).label("exercise_count"))
        .outerjoin(WorkoutExercise, WorkoutExercise.workout_id == Workout.id)
        .group_by(Workout.id)
        .order_by(Workout.date.desc(), Workout.created_at.desc(), Workout.id.desc())
    )


def to_list_item(workout: Workout, exercise_count: int) -> WorkoutListItem:
    return WorkoutListItem(
        **WorkoutOut.model_validate(workout).model_dump(),
        exercise_count=int(exercise_count or 0),
    )


def _parse_date(value: dt.date | str | None) -> dt.date:
    if not value:
        raise ValidationError("date and title are required")
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value!r}") from e


def _parse_duration(value: int | str | None) -> int:
    if value is None or value == "":
        return 0
    try:
        minutes = int(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid duration_minutes: {value!r}") from e
    if minutes < 0:
        raise ValidationError("duration_minutes must be non-negative")
    return minutes


def _coerce_entry(entry: WorkoutExerciseIn | Mapping) -> WorkoutExerciseIn:
    if isinstance(entry, WorkoutExerciseIn):
        return entry
    try:
        return WorkoutExerciseIn.model_validate(entry)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid exercise entry: {e.errors()[0]['msg']}") from e


class WorkoutService:
    """Queries and commands over logged workouts."""

    def __init__(self, store: Store) -> None:
        self.store = store

    async def list_workouts(self) -> list[WorkoutListItem]:
        async with self.store.session() as db:
            res = await db.execute(workouts_with_counts())
            return [to_list_item(w, count) for w, count in res.all()]

    async def get_workout(self, workout_id: int) -> WorkoutDetailOut:
        async with self.store.session() as db:
            workout = await db.get(Workout, workout_id)
            if workout is None:
                raise WorkoutNotFoundError(workout_id)

            # Inner join: entries whose exercise was deleted are not listed
            res = await db.execute(
                select(
                    WorkoutExercise,
                    Exercise.name.label("exercise_name"),
                    Exercise.category,
                    Exercise.muscle_group,
                )
                .join(Exercise, Exercise.id == WorkoutExercise.exercise_id)
                .where(WorkoutExercise.workout_id == workout_id)
                .order_by(WorkoutExercise.id.asc())
            )
            exercises = [
                WorkoutExerciseOut(
                    id=we.id,
                    workout_id=we.workout_id,
                    exercise_id=we.exercise_id,
                    sets=we.sets,
                    reps=we.reps,
                    weight=we.weight,
                    notes=we.notes,
                    exercise_name=exercise_name,
                    category=category,
                    muscle_group=muscle_group,
                )
                for we, exercise_name, category, muscle_group in res.all()
            ]

        return WorkoutDetailOut(
            **WorkoutOut.model_validate(workout).model_dump(),
            exercises=exercises,
        )

    async def create_workout(
        self,
        date: dt.date | str | None,
        title: str | None,
        notes: str | None = None,
        duration_minutes: int | None = None,
        exercises: Iterable[WorkoutExerciseIn | Mapping] | None = None,
    ) -> WorkoutOut:
        """Insert a workout and its exercise entries as one transaction.

        If any entry references an exercise that does not exist the whole
        insert is rolled back and ``ExerciseNotFoundError`` is raised.
        """
        title = (title or "").strip()
        if not date or not title:
            raise ValidationError("date and title are required")
        workout_date = _parse_date(date)
        minutes = _parse_duration(duration_minutes)
        entries = [_coerce_entry(e) for e in exercises or []]

        async with self.store.transaction() as db:
            workout = Workout(
                date=workout_date,
                title=title,
                notes=notes or "",
                duration_minutes=minutes,
            )
            db.add(workout)
            await db.flush()

            for entry in entries:
                if await db.get(Exercise, entry.exercise_id) is None:
                    raise ExerciseNotFoundError(entry.exercise_id)
                db.add(
                    WorkoutExercise(
                        workout_id=workout.id,
                        exercise_id=entry.exercise_id,
                        sets=entry.sets,
                        reps=entry.reps,
                        weight=entry.weight,
                        notes=entry.notes or "",
                    )
                )
            await db.flush()
            await db.refresh(workout)

        logger.info(
            "workout_created",
            workout_id=workout.id,
            date=workout.date.isoformat(),
            exercises=len(entries),
        )
        return WorkoutOut.model_validate(workout)

    async def delete_workout(self, workout_id: int) -> None:
        async with self.store.transaction() as db:
            workout = await db.get(Workout, workout_id)
            if workout is None:
                raise WorkoutNotFoundError(workout_id)
            # workout_exercises rows go with it through ON DELETE CASCADE
            await db.execute(delete(Workout).where(Workout.id == workout_id))

        logger.info("workout_deleted", workout_id=workout_id)
