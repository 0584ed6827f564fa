import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gymlog.models.exercise import Exercise

logger = structlog.get_logger(__name__)

# (name, category, muscle_group, description)
DEFAULT_EXERCISES: list[tuple[str, str, str, str]] = [
    # Chest
    ("Bench Press", "Strength", "Chest", "Classic barbell bench press for chest development"),
    ("Incline Dumbbell Press", "Strength", "Chest", "Upper chest focused dumbbell press"),
    ("Push-Up", "Bodyweight", "Chest", "Classic bodyweight chest exercise"),
    ("Cable Flyes", "Isolation", "Chest", "Cable crossover flyes for inner chest"),
    ("Dips", "Bodyweight", "Chest", "Tricep and chest compound movement"),
    # Back
    ("Pull-Up", "Bodyweight", "Back", "Classic lat-focused bodyweight pull"),
    ("Deadlift", "Strength", "Back", "King of all compound movements"),
    ("Barbell Row", "Strength", "Back", "Bent-over barbell row for upper back thickness"),
    ("Lat Pulldown", "Strength", "Back", "Cable lat pulldown for lat width"),
    ("Seated Cable Row", "Strength", "Back", "Seated cable row for mid-back"),
    # Legs
    ("Squat", "Strength", "Legs", "King of lower body exercises"),
    ("Romanian Deadlift", "Strength", "Legs", "Hip-hinge for hamstrings and glutes"),
    ("Leg Press", "Strength", "Legs", "Quad-focused machine press"),
    ("Leg Curl", "Isolation", "Legs", "Hamstring isolation curl machine"),
    ("Calf Raise", "Isolation", "Legs", "Standing or seated calf raises"),
    ("Lunges", "Bodyweight", "Legs", "Unilateral leg exercise"),
    # Shoulders
    ("Overhead Press", "Strength", "Shoulders", "Barbell or dumbbell overhead press"),
    ("Lateral Raise", "Isolation", "Shoulders", "Dumbbell lateral raise for side delts"),
    ("Face Pull", "Isolation", "Shoulders", "Rear delt cable face pull"),
    ("Arnold Press", "Isolation", "Shoulders", "Rotating dumbbell shoulder press"),
    # Arms
    ("Barbell Curl", "Isolation", "Biceps", "Classic barbell bicep curl"),
    ("Hammer Curl", "Isolation", "Biceps", "Neutral grip dumbbell curl"),
    ("Tricep Pushdown", "Isolation", "Triceps", "Cable tricep pushdown"),
    ("Skull Crusher", "Isolation", "Triceps", "Lying tricep extension"),
    # Core
    ("Plank", "Bodyweight", "Core", "Isometric core hold"),
    ("Crunches", "Bodyweight", "Core", "Classic abdominal crunch"),
    ("Russian Twist", "Bodyweight", "Core", "Rotational core exercise"),
    ("Hanging Leg Raise", "Bodyweight", "Core", "Hanging ab raise for lower abs"),
]


async def seed_exercises(db: AsyncSession) -> int:
    """Insert the default library when the exercises table is empty.

    Returns the number of rows inserted.
    """
    res = await db.execute(select(func.count(Exercise.id)))
    if int(res.scalar() or 0) > 0:
        return 0

    db.add_all(
        Exercise(name=name, category=category, muscle_group=muscle_group, description=description)
        for name, category, muscle_group, description in DEFAULT_EXERCISES
    )
    await db.flush()
    logger.info("exercises_seeded", count=len(DEFAULT_EXERCISES))
    return len(DEFAULT_EXERCISES)
