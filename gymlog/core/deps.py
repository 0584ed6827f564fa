from fastapi import Depends

from gymlog.core.db import Store, get_store
from gymlog.services.exercise_service import ExerciseService
from gymlog.services.stats_service import StatsService
from gymlog.services.workout_service import WorkoutService


def get_exercise_service(store: Store = Depends(get_store)) -> ExerciseService:
    return ExerciseService(store)


def get_workout_service(store: Store = Depends(get_store)) -> WorkoutService:
    return WorkoutService(store)


def get_stats_service(store: Store = Depends(get_store)) -> StatsService:
    return StatsService(store)
