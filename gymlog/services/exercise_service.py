import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from gymlog.core.db import Store
from gymlog.core.errors import ConflictError, ExerciseNotFoundError, ValidationError
from gymlog.models.exercise import Exercise
from gymlog.schemas.exercises import CategoriesOut, ExerciseOut

logger = structlog.get_logger(__name__)


class ExerciseService:
    """Queries and commands over the exercise library."""

    def __init__(self, store: Store) -> None:
        self.store = store

    async def list_exercises(
        self,
        category: str | None = None,
        muscle_group: str | None = None,
    ) -> list[ExerciseOut]:
        query = select(Exercise)
        if category:
            query = query.where(Exercise.category == category)
        if muscle_group:
            query = query.where(Exercise.muscle_group == muscle_group)
        query = query.order_by(Exercise.muscle_group.asc(), Exercise.name.asc())

        async with self.store.session() as db:
            res = await db.execute(query)
            return [ExerciseOut.model_validate(e) for e in res.scalars().all()]

    async def list_categories(self) -> CategoriesOut:
        async with self.store.session() as db:
            cat_res = await db.execute(
                select(Exercise.category).distinct().order_by(Exercise.category.asc())
            )
            mg_res = await db.execute(
                select(Exercise.muscle_group).distinct().order_by(Exercise.muscle_group.asc())
            )
            return CategoriesOut(
                categories=list(cat_res.scalars().all()),
                muscle_groups=list(mg_res.scalars().all()),
            )

    async def create_exercise(
        self,
        name: str,
        category: str,
        muscle_group: str,
        description: str | None = None,
    ) -> ExerciseOut:
        name = (name or "").strip()
        category = (category or "").strip()
        muscle_group = (muscle_group or "").strip()
        if not name or not category or not muscle_group:
            raise ValidationError("name, category, and muscle_group are required")

        async with self.store.transaction() as db:
            res = await db.execute(select(Exercise.id).where(Exercise.name == name))
            if res.scalar_one_or_none() is not None:
                raise ConflictError("Exercise already exists")

            exercise = Exercise(
                name=name,
                category=category,
                muscle_group=muscle_group,
                description=description or "",
            )
            db.add(exercise)
            try:
                await db.flush()
            except IntegrityError as e:
                # Lost a race with another insert of the same name
                raise ConflictError("Exercise already exists") from e
            await db.refresh(exercise)

        logger.info("exercise_created", exercise_id=exercise.id, name=exercise.name)
        return ExerciseOut.model_validate(exercise)

    async def delete_exercise(self, exercise_id: int) -> None:
        # workout_exercises rows that reference this id are left as they are
        async with self.store.transaction() as db:
            exercise = await db.get(Exercise, exercise_id)
            if exercise is None:
                raise ExerciseNotFoundError(exercise_id)
            await db.delete(exercise)

        logger.info("exercise_deleted", exercise_id=exercise_id)
