"""Workout and WorkoutExercise models."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitness_tracker.db.base import Base


class Workout(Base):
    """A named workout owned by one user, with an ordered list of exercise entries."""

    __tablename__ = "workouts"
    __table_args__ = (Index("ix_workouts_user_id", "user_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    # Insertion order; callers re-sort by ``order`` where needed
    workout_exercises: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="WorkoutExercise.id",
    )


class WorkoutExercise(Base):
    """One exercise prescription inside a workout: sets, repetitions, weight, position.

    (workout_id, exercise_id, order) is unique."""

    __tablename__ = "workout_exercises"
    __table_args__ = (
        UniqueConstraint("workout_id", "exercise_id", "order", name="uq_workout_exercises_workout_exercise_order"),
        Index("ix_workout_exercises_workout_id", "workout_id"),
        Index("ix_workout_exercises_exercise_id", "exercise_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    workout_id: Mapped[int] = mapped_column(Integer, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)
    exercise_id: Mapped[int] = mapped_column(Integer, ForeignKey("exercises.id", ondelete="RESTRICT"), nullable=False)
    sets: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    repetitions: Mapped[str | None] = mapped_column(String(50), nullable=True)  # free-form, e.g. "8-10"
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    workout: Mapped["Workout"] = relationship("Workout", back_populates="workout_exercises")
    exercise: Mapped["Exercise"] = relationship("Exercise", back_populates="workout_entries")
