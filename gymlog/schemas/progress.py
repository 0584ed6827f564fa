from datetime import date
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gymlog.schemas.workouts import WorkoutListItem


class ProgressPoint(BaseModel):
    date: date
    sets: int
    reps: int
    weight: float
    volume: float
    exercise_name: str


class MuscleVolume(BaseModel):
    muscle_group: str
    total_volume: float


class WeekCount(BaseModel):
    week: str  # e.g. 2026-W41
    count: int


class SummaryOut(BaseModel):
    # Serialized with camelCase keys: totalWorkouts, volumeByMuscle, ...
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_workouts: int
    total_volume: float
    total_exercises: int
    week_workouts: int
    streak: int
    recent_workouts: list[WorkoutListItem]
    volume_by_muscle: list[MuscleVolume]
    weekly_data: list[WeekCount]
