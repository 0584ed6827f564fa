from __future__ import annotations

from sqlalchemy import Float, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from gymlog.core.db import Base


class WorkoutExercise(Base):
    __tablename__ = "workout_exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    workout_id: Mapped[int] = mapped_column(
        ForeignKey("workouts.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    # Checked by the workout service at insert time only. Deleting an exercise
    # leaves these rows pointing at a missing id.
    exercise_id: Mapped[int] = mapped_column(Integer, index=True, nullable=False)

    sets: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    reps: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=0)  # kg

    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
