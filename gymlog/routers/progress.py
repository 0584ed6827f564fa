from fastapi import APIRouter, Depends

from gymlog.core.deps import get_stats_service
from gymlog.schemas.progress import ProgressPoint, SummaryOut
from gymlog.services.stats_service import StatsService

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get("/exercise/{exercise_id}", response_model=list[ProgressPoint])
async def exercise_progress(
    exercise_id: int,
    service: StatsService = Depends(get_stats_service),
):
    """Weight and volume per logged entry of one exercise, oldest first."""
    return await service.exercise_progress(exercise_id)


@router.get("/summary", response_model=SummaryOut)
async def progress_summary(service: StatsService = Depends(get_stats_service)):
    return await service.summary()
