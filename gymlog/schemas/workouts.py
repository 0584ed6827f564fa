from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field


class WorkoutExerciseIn(BaseModel):
    exercise_id: int
    sets: int = Field(gt=0)
    reps: int = Field(gt=0)
    weight: float = Field(default=0, ge=0)
    notes: str | None = None


class WorkoutCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    date: date
    title: str = Field(min_length=1, max_length=100)
    notes: str | None = None
    duration_minutes: int | None = Field(default=None, ge=0)
    exercises: list[WorkoutExerciseIn] = Field(default_factory=list)


class WorkoutOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: date
    title: str
    notes: str
    duration_minutes: int
    created_at: datetime


class WorkoutListItem(WorkoutOut):
    exercise_count: int


class WorkoutExerciseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workout_id: int
    exercise_id: int
    sets: int
    reps: int
    weight: float
    notes: str
    exercise_name: str
    category: str
    muscle_group: str


class WorkoutDetailOut(WorkoutOut):
    exercises: list[WorkoutExerciseOut]
