from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

from gymlog.client import derive
from gymlog.client.api import GymLogClient


@dataclass
class DashboardView:
    total_workouts: int
    streak: int
    total_volume: str
    week_workouts: int
    volume_by_muscle: list[dict]
    weekly_data: list[dict]
    recent_workouts: list[dict]


@dataclass
class LibraryView:
    exercises: list[dict]
    pills: list[str]
    muscle_group: str
    total: int


@dataclass
class ProgressView:
    exercise: dict | None
    points: list[dict] = field(default_factory=list)
    stats: dict = field(default_factory=dict)


@dataclass
class LogWorkoutResult:
    errors: dict[str, str]
    workout: dict | None = None


def dashboard(client: GymLogClient) -> DashboardView:
    stats = client.get_summary()
    return DashboardView(
        total_workouts=stats.get("totalWorkouts", 0),
        streak=stats.get("streak", 0),
        total_volume=derive.format_volume_k(stats.get("totalVolume", 0)),
        week_workouts=stats.get("weekWorkouts", 0),
        volume_by_muscle=stats.get("volumeByMuscle", []),
        weekly_data=stats.get("weeklyData", []),
        recent_workouts=stats.get("recentWorkouts", []),
    )


def exercise_library(client: GymLogClient, muscle_group: str = "All", search: str = "") -> LibraryView:
    exercises = client.get_exercises()
    categories = client.get_categories()
    return LibraryView(
        exercises=derive.filter_library(exercises, muscle_group=muscle_group, search=search),
        pills=derive.muscle_group_pills(categories),
        muscle_group=muscle_group,
        total=len(exercises),
    )


def progress_view(client: GymLogClient, exercise_id: int | None = None) -> ProgressView:
    """Progress charts for one exercise; defaults to the first in the library."""
    exercises = client.get_exercises()
    if not exercises:
        return ProgressView(exercise=None)
    if exercise_id is None:
        selected = exercises[0]
    else:
        selected = next((e for e in exercises if e["id"] == exercise_id), None)
        if selected is None:
            return ProgressView(exercise=None)

    points = derive.progress_by_date(client.get_exercise_progress(selected["id"]))
    return ProgressView(exercise=selected, points=points, stats=derive.progress_stats(points))


def log_workout(client: GymLogClient, form: dict, entries: list[dict]) -> LogWorkoutResult:
    form = {"date": dt.date.today().isoformat(), **{k: v for k, v in form.items() if v is not None}}
    errors = derive.validate_workout_form(form, entries)
    if errors:
        return LogWorkoutResult(errors=errors)
    workout = client.create_workout(derive.build_workout_payload(form, entries))
    return LogWorkoutResult(errors={}, workout=workout)
