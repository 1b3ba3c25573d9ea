"""Exercise model - shared catalog of exercise types."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitness_tracker.db.base import Base


class Exercise(Base):
    """Catalog entry referenced by workout entries. Not owned by any workout."""

    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    # No cascade: deleting an exercise that is still referenced is rejected
    workout_entries: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise", back_populates="exercise", passive_deletes="all"
    )
