"""Workout log schemas."""

from datetime import datetime

from pydantic import Field

from fitness_tracker.schemas.base import APIModel


class WorkoutLogCreate(APIModel):
    workout_exercise_id: int
    set_number: int = Field(..., ge=1)
    reps_completed: int | None = Field(None, ge=0)
    weight_used: float | None = Field(None, ge=0)
    notes: str | None = None


class WorkoutLogRead(APIModel):
    id: int
    user_id: int
    workout_id: int
    workout_exercise_id: int
    set_number: int
    reps_completed: int | None = None
    weight_used: float | None = None
    notes: str | None = None
    logged_at: datetime
