from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gymlog.core.db import Base


class Exercise(Base):
    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)  # e.g. Bench Press
    category: Mapped[str] = mapped_column(String(60), nullable=False)  # e.g. Strength
    muscle_group: Mapped[str] = mapped_column(String(60), index=True, nullable=False)  # e.g. Chest

    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
