"""Read-only statistics over logged workouts.

Everything here is recomputed from the tables on each call; nothing is
cached or maintained incrementally.
"""

import datetime as dt
from collections import Counter
from collections.abc import Iterable

from sqlalchemy import func, select

from gymlog.core.db import Store
from gymlog.models.exercise import Exercise
from gymlog.models.workout import Workout
from gymlog.models.workout_exercise import WorkoutExercise
from gymlog.schemas.progress import MuscleVolume, ProgressPoint, SummaryOut, WeekCount
from gymlog.services.workout_service import to_list_item, workouts_with_counts

RECENT_WORKOUTS_LIMIT = 5
WEEK_WINDOW_DAYS = 7
WEEKLY_WINDOW_DAYS = 56

VOLUME = WorkoutExercise.sets * WorkoutExercise.reps * WorkoutExercise.weight


def compute_streak(dates: Iterable[dt.date], today: dt.date) -> int:
    """Count consecutive training days ending today or yesterday.

    Dates are walked newest first. The i-th date keeps the streak going when it
    is exactly ``i`` or ``i + 1`` days before ``today``, so a day that has not
    been logged yet does not break it.
    """
    streak = 0
    for i, day in enumerate(sorted(set(dates), reverse=True)):
        diff = (today - day).days
        if diff == i or diff == i + 1:
            streak += 1
        else:
            break
    return streak


def week_label(day: dt.date) -> str:
    # Year plus Monday-based week number, e.g. 2026-W41
    return day.strftime("%Y-W%W")


def weekly_counts(dates: Iterable[dt.date]) -> list[WeekCount]:
    counts = Counter(week_label(d) for d in dates)
    return [WeekCount(week=week, count=count) for week, count in sorted(counts.items())]


class StatsService:
    def __init__(self, store: Store) -> None:
        self.store = store

    async def exercise_progress(self, exercise_id: int) -> list[ProgressPoint]:
        async with self.store.session() as db:
            res = await db.execute(
                select(
                    Workout.date,
                    WorkoutExercise.sets,
                    WorkoutExercise.reps,
                    WorkoutExercise.weight,
                    VOLUME.label("volume"),
                    Exercise.name.label("exercise_name"),
                )
                .select_from(WorkoutExercise)
                .join(Workout, WorkoutExercise.workout_id == Workout.id)
                .join(Exercise, WorkoutExercise.exercise_id == Exercise.id)
                .where(WorkoutExercise.exercise_id == exercise_id)
                .order_by(Workout.date.asc(), WorkoutExercise.id.asc())
            )
            return [
                ProgressPoint(
                    date=r.date,
                    sets=r.sets,
                    reps=r.reps,
                    weight=float(r.weight),
                    volume=float(r.volume or 0),
                    exercise_name=r.exercise_name,
                )
                for r in res.all()
            ]

    async def summary(self, today: dt.date | None = None) -> SummaryOut:
        today = today or dt.date.today()

        async with self.store.session() as db:
            total_workouts = int((await db.execute(select(func.count(Workout.id)))).scalar() or 0)
            # Includes entries whose exercise has since been deleted
            total_volume = float(
                (await db.execute(select(func.coalesce(func.sum(VOLUME), 0)))).scalar() or 0
            )
            total_exercises = int((await db.execute(select(func.count(Exercise.id)))).scalar() or 0)

            week_res = await db.execute(
                select(func.count(Workout.id)).where(
                    Workout.date >= today - dt.timedelta(days=WEEK_WINDOW_DAYS)
                )
            )
            week_workouts = int(week_res.scalar() or 0)

            dates_res = await db.execute(
                select(Workout.date).distinct().order_by(Workout.date.desc())
            )
            streak = compute_streak(dates_res.scalars().all(), today)

            recent_res = await db.execute(workouts_with_counts().limit(RECENT_WORKOUTS_LIMIT))
            recent_workouts = [to_list_item(w, count) for w, count in recent_res.all()]

            muscle_res = await db.execute(
                select(
                    Exercise.muscle_group,
                    func.sum(VOLUME).label("total_volume"),
                )
                .select_from(WorkoutExercise)
                .join(Exercise, WorkoutExercise.exercise_id == Exercise.id)
                .group_by(Exercise.muscle_group)
                .order_by(func.sum(VOLUME).desc())
            )
            volume_by_muscle = [
                MuscleVolume(muscle_group=r.muscle_group, total_volume=float(r.total_volume or 0))
                for r in muscle_res.all()
            ]

            weekly_res = await db.execute(
                select(Workout.date).where(
                    Workout.date >= today - dt.timedelta(days=WEEKLY_WINDOW_DAYS)
                )
            )
            weekly_data = weekly_counts(weekly_res.scalars().all())

        return SummaryOut(
            total_workouts=total_workouts,
            total_volume=total_volume,
            total_exercises=total_exercises,
            week_workouts=week_workouts,
            streak=streak,
            recent_workouts=recent_workouts,
            volume_by_muscle=volume_by_muscle,
            weekly_data=weekly_data,
        )
