"""Workout log - what was actually performed for one set."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from fitness_tracker.db.base import Base


class WorkoutLog(Base):
    """Leaf record; removed with its workout, its workout entry or its user."""

    __tablename__ = "logs"
    __table_args__ = (
        Index("ix_logs_user_id", "user_id"),
        Index("ix_logs_workout_id", "workout_id"),
        Index("ix_logs_workout_exercise_id", "workout_exercise_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    workout_id: Mapped[int] = mapped_column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)
    workout_exercise_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("workout_exercises.id", ondelete="CASCADE"), nullable=False
    )
    set_number: Mapped[int] = mapped_column(Integer, nullable=False)
    reps_completed: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight_used: Mapped[float | None] = mapped_column(Float, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    logged_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
