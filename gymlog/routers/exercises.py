from fastapi import APIRouter, Depends, status

from gymlog.core.deps import get_exercise_service
from gymlog.schemas.exercises import CategoriesOut, ExerciseCreate, ExerciseOut, MessageOut
from gymlog.services.exercise_service import ExerciseService

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("", response_model=list[ExerciseOut])
async def list_exercises(
    category: str | None = None,
    muscle_group: str | None = None,
    service: ExerciseService = Depends(get_exercise_service),
):
    return await service.list_exercises(category=category, muscle_group=muscle_group)


@router.get("/categories", response_model=CategoriesOut)
async def list_categories(service: ExerciseService = Depends(get_exercise_service)):
    return await service.list_categories()


@router.post("", response_model=ExerciseOut, status_code=status.HTTP_201_CREATED)
async def create_exercise(
    payload: ExerciseCreate,
    service: ExerciseService = Depends(get_exercise_service),
):
    return await service.create_exercise(
        name=payload.name,
        category=payload.category,
        muscle_group=payload.muscle_group,
        description=payload.description,
    )


@router.delete("/{exercise_id}", response_model=MessageOut)
async def delete_exercise(
    exercise_id: int,
    service: ExerciseService = Depends(get_exercise_service),
):
    await service.delete_exercise(exercise_id)
    return MessageOut(message="Exercise deleted")
