from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import func, select

from gymlog.core.errors import ExerciseNotFoundError, NotFoundError, ValidationError
from gymlog.models.workout_exercise import WorkoutExercise
from gymlog.services.exercise_service import ExerciseService
from gymlog.services.stats_service import StatsService, compute_streak, week_label, weekly_counts
from gymlog.services.workout_service import WorkoutService

TODAY = date(2026, 10, 19)  # a Monday


async def _ids(store) -> dict[str, int]:
    return {e.name: e.id for e in await ExerciseService(store).list_exercises()}


def test_streak_three_consecutive_days():
    dates = [TODAY, TODAY - timedelta(days=1), TODAY - timedelta(days=2)]
    assert compute_streak(dates, TODAY) == 3


def test_streak_breaks_on_gap():
    dates = [TODAY - timedelta(days=1), TODAY - timedelta(days=3)]
    assert compute_streak(dates, TODAY) == 1


def test_streak_tolerates_today_unlogged():
    dates = [TODAY - timedelta(days=1), TODAY - timedelta(days=2), TODAY - timedelta(days=3)]
    assert compute_streak(dates, TODAY) == 3


def test_streak_edge_cases():
    assert compute_streak([], TODAY) == 0
    assert compute_streak([TODAY - timedelta(days=2)], TODAY) == 0
    # duplicate dates count once
    assert compute_streak([TODAY, TODAY, TODAY - timedelta(days=1)], TODAY) == 2


def test_weekly_counts_collapse_same_week():
    monday = date(2026, 10, 12)
    dates = [monday, monday + timedelta(days=2), monday + timedelta(days=6), monday + timedelta(days=7)]
    result = weekly_counts(dates)
    assert [(w.week, w.count) for w in result] == [
        (week_label(monday), 3),
        (week_label(monday + timedelta(days=7)), 1),
    ]
    assert week_label(monday) == "2026-W41"


@pytest.mark.asyncio
async def test_summary_on_empty_store(store):
    summary = await StatsService(store).summary(today=TODAY)
    assert summary.total_workouts == 0
    assert summary.total_volume == 0
    assert summary.total_exercises == 28
    assert summary.streak == 0
    assert summary.recent_workouts == []
    assert summary.volume_by_muscle == []
    assert summary.weekly_data == []


@pytest.mark.asyncio
async def test_summary_totals_and_rollups(store):
    ids = await _ids(store)
    workouts = WorkoutService(store)
    entries_by_day = {
        TODAY: [
            {"exercise_id": ids["Bench Press"], "sets": 4, "reps": 8, "weight": 82.5},
            {"exercise_id": ids["Barbell Curl"], "sets": 3, "reps": 12, "weight": 25},
        ],
        TODAY - timedelta(days=1): [
            {"exercise_id": ids["Squat"], "sets": 5, "reps": 5, "weight": 120},
        ],
        TODAY - timedelta(days=2): [
            {"exercise_id": ids["Deadlift"], "sets": 1, "reps": 5, "weight": 160},
            {"exercise_id": ids["Plank"], "sets": 3, "reps": 1, "weight": 0},
        ],
        TODAY - timedelta(days=20): [
            {"exercise_id": ids["Leg Press"], "sets": 3, "reps": 10, "weight": 200},
        ],
        TODAY - timedelta(days=90): [
            {"exercise_id": ids["Bench Press"], "sets": 3, "reps": 5, "weight": 70},
        ],
    }
    for day, entries in entries_by_day.items():
        await workouts.create_workout(date=day, title=f"Session {day}", exercises=entries)

    summary = await StatsService(store).summary(today=TODAY)

    expected_volume = sum(
        e["sets"] * e["reps"] * e["weight"] for entries in entries_by_day.values() for e in entries
    )
    assert summary.total_volume == pytest.approx(expected_volume)
    assert summary.total_workouts == 5
    assert summary.week_workouts == 3
    assert summary.streak == 3

    recent = summary.recent_workouts
    assert len(recent) == 5
    assert [w.date for w in recent] == sorted(entries_by_day, reverse=True)
    assert recent[0].exercise_count == 2

    volumes = [m.total_volume for m in summary.volume_by_muscle]
    assert volumes == sorted(volumes, reverse=True)
    legs = next(m for m in summary.volume_by_muscle if m.muscle_group == "Legs")
    assert legs.total_volume == pytest.approx(5 * 5 * 120 + 3 * 10 * 200)

    # The 90-day-old workout is outside the 56-day window
    assert sum(w.count for w in summary.weekly_data) == 4
    weeks = [w.week for w in summary.weekly_data]
    assert weeks == sorted(weeks)


@pytest.mark.asyncio
async def test_summary_serializes_with_camel_case_keys(store):
    summary = await StatsService(store).summary(today=TODAY)
    dumped = summary.model_dump(by_alias=True)
    assert set(dumped) == {
        "totalWorkouts",
        "totalVolume",
        "totalExercises",
        "weekWorkouts",
        "streak",
        "recentWorkouts",
        "volumeByMuscle",
        "weeklyData",
    }


@pytest.mark.asyncio
async def test_summary_window_edges_are_inclusive(store):
    workouts = WorkoutService(store)
    for days_back in (7, 8, 56, 57):
        await workouts.create_workout(date=TODAY - timedelta(days=days_back), title=f"{days_back} days back")

    summary = await StatsService(store).summary(today=TODAY)
    assert summary.week_workouts == 1
    assert sum(w.count for w in summary.weekly_data) == 3


@pytest.mark.asyncio
async def test_recent_workouts_limited_to_five(store):
    workouts = WorkoutService(store)
    for offset in range(7):
        await workouts.create_workout(date=TODAY - timedelta(days=offset), title=f"Day {offset}")

    summary = await StatsService(store).summary(today=TODAY)
    assert [w.title for w in summary.recent_workouts] == [f"Day {i}" for i in range(5)]
    assert summary.streak == 7


@pytest.mark.asyncio
async def test_exercise_progress_ascending_with_volume(store):
    ids = await _ids(store)
    workouts = WorkoutService(store)
    bench = ids["Bench Press"]
    await workouts.create_workout(
        date=TODAY, title="Later", exercises=[{"exercise_id": bench, "sets": 3, "reps": 5, "weight": 90}]
    )
    await workouts.create_workout(
        date=TODAY - timedelta(days=7),
        title="Earlier",
        exercises=[{"exercise_id": bench, "sets": 4, "reps": 8, "weight": 80}],
    )

    points = await StatsService(store).exercise_progress(bench)
    assert [p.date for p in points] == [TODAY - timedelta(days=7), TODAY]
    assert points[0].volume == 4 * 8 * 80
    assert points[1].volume == 3 * 5 * 90
    assert {p.exercise_name for p in points} == {"Bench Press"}

    assert await StatsService(store).exercise_progress(99999) == []


@pytest.mark.asyncio
async def test_create_workout_is_atomic(store):
    ids = await _ids(store)
    workouts = WorkoutService(store)

    with pytest.raises(ExerciseNotFoundError):
        await workouts.create_workout(
            date=TODAY,
            title="Broken",
            exercises=[
                {"exercise_id": ids["Squat"], "sets": 3, "reps": 5, "weight": 100},
                {"exercise_id": 424242, "sets": 3, "reps": 5, "weight": 100},
            ],
        )

    assert await workouts.list_workouts() == []
    async with store.session() as db:
        count = (await db.execute(select(func.count(WorkoutExercise.id)))).scalar()
    assert count == 0


@pytest.mark.asyncio
async def test_delete_workout_cascades(store):
    ids = await _ids(store)
    workouts = WorkoutService(store)
    created = await workouts.create_workout(
        date=TODAY,
        title="Pull",
        exercises=[
            {"exercise_id": ids["Pull-Up"], "sets": 3, "reps": 8, "weight": 0},
            {"exercise_id": ids["Barbell Row"], "sets": 4, "reps": 8, "weight": 60},
        ],
    )
    assert len((await workouts.get_workout(created.id)).exercises) == 2

    await workouts.delete_workout(created.id)

    async with store.session() as db:
        remaining = (
            await db.execute(
                select(func.count(WorkoutExercise.id)).where(WorkoutExercise.workout_id == created.id)
            )
        ).scalar()
    assert remaining == 0
    with pytest.raises(NotFoundError):
        await workouts.get_workout(created.id)


@pytest.mark.asyncio
async def test_delete_referenced_exercise_leaves_rows(store):
    ids = await _ids(store)
    exercises = ExerciseService(store)
    workouts = WorkoutService(store)
    created = await workouts.create_workout(
        date=TODAY,
        title="Arms",
        exercises=[{"exercise_id": ids["Hammer Curl"], "sets": 3, "reps": 10, "weight": 15}],
    )

    await exercises.delete_exercise(ids["Hammer Curl"])

    async with store.session() as db:
        rows = (
            await db.execute(select(WorkoutExercise).where(WorkoutExercise.workout_id == created.id))
        ).scalars().all()
    assert [(r.exercise_id, r.sets, r.reps, r.weight) for r in rows] == [(ids["Hammer Curl"], 3, 10, 15)]

    summary = await StatsService(store).summary(today=TODAY)
    assert summary.total_volume == 3 * 10 * 15
    assert summary.volume_by_muscle == []


@pytest.mark.asyncio
async def test_service_validation_errors(store):
    workouts = WorkoutService(store)
    with pytest.raises(ValidationError):
        await workouts.create_workout(date=TODAY, title="")
    with pytest.raises(ValidationError):
        await workouts.create_workout(date=None, title="No date")
    with pytest.raises(ValidationError):
        await workouts.create_workout(date="19/10/2026", title="Bad date")

    exercises = ExerciseService(store)
    with pytest.raises(ValidationError):
        await exercises.create_exercise(name="Thing", category="", muscle_group="Back")


@pytest.mark.asyncio
async def test_create_workout_coerces_duration_and_datetime(store):
    workouts = WorkoutService(store)
    created = await workouts.create_workout(
        date=datetime(2026, 10, 19, 12, 30), title="Evening", duration_minutes="30"
    )
    assert created.date == TODAY
    assert created.duration_minutes == 30

    with pytest.raises(ValidationError):
        await workouts.create_workout(date=TODAY, title="Bad", duration_minutes="half an hour")
    with pytest.raises(ValidationError):
        await workouts.create_workout(date=TODAY, title="Negative", duration_minutes=-5)
    assert [w.title for w in await workouts.list_workouts()] == ["Evening"]
