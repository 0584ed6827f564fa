class GymLogError(Exception):
    """Base class for errors raised by the services and the stats engine."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GymLogError):
    """A required field is missing or invalid."""


class ConflictError(GymLogError):
    """A unique key already exists."""


class NotFoundError(GymLogError):
    """A referenced id does not exist."""


class StoreError(GymLogError):
    """Unexpected persistence failure."""


class ExerciseNotFoundError(NotFoundError):
    def __init__(self, exercise_id: int):
        super().__init__(f"Exercise {exercise_id} not found")
        self.exercise_id = exercise_id


class WorkoutNotFoundError(NotFoundError):
    def __init__(self, workout_id: int):
        super().__init__(f"Workout {workout_id} not found")
        self.workout_id = workout_id
