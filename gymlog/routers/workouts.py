from fastapi import APIRouter, Depends, status

from gymlog.core.deps import get_workout_service
from gymlog.schemas.exercises import MessageOut
from gymlog.schemas.workouts import WorkoutCreate, WorkoutDetailOut, WorkoutListItem, WorkoutOut
from gymlog.services.workout_service import WorkoutService

router = APIRouter(prefix="/workouts", tags=["workouts"])


@router.get("", response_model=list[WorkoutListItem])
async def list_workouts(service: WorkoutService = Depends(get_workout_service)):
    return await service.list_workouts()


@router.get("/{workout_id}", response_model=WorkoutDetailOut)
async def get_workout(
    workout_id: int,
    service: WorkoutService = Depends(get_workout_service),
):
    return await service.get_workout(workout_id)


@router.post("", response_model=WorkoutOut, status_code=status.HTTP_201_CREATED)
async def create_workout(
    payload: WorkoutCreate,
    service: WorkoutService = Depends(get_workout_service),
):
    return await service.create_workout(
        date=payload.date,
        title=payload.title,
        notes=payload.notes,
        duration_minutes=payload.duration_minutes,
        exercises=payload.exercises,
    )


@router.delete("/{workout_id}", response_model=MessageOut)
async def delete_workout(
    workout_id: int,
    service: WorkoutService = Depends(get_workout_service),
):
    await service.delete_workout(workout_id)
    return MessageOut(message="Workout deleted")
