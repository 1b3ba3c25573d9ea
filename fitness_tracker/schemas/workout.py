"""Workout and WorkoutExercise schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from fitness_tracker.models.workout import Workout
from fitness_tracker.schemas.base import APIModel
from fitness_tracker.schemas.exercise import ExerciseRead


class WorkoutExerciseIn(APIModel):
    """One entry of the ``exercises`` list in create/update bodies. Omitted sets/order default to 1."""

    exercise_id: int
    sets: int | None = Field(None, ge=1)
    repetitions: str | None = Field(None, max_length=50)
    weight: float | None = Field(None, ge=0)
    order: int | None = Field(None, ge=1)


class WorkoutCreate(APIModel):
    # Emptiness is checked after trimming by the service, not here
    name: str
    description: str | None = None
    exercises: list[WorkoutExerciseIn]


class WorkoutUpdate(APIModel):
    name: str | None = None
    description: str | None = None
    exercises: list[WorkoutExerciseIn] | None = None


class WorkoutExerciseRead(APIModel):
    id: int
    workout_id: int
    exercise_id: int
    sets: int
    repetitions: str | None = None
    weight: float | None = None
    order: int
    exercise: ExerciseRead


class WorkoutRead(APIModel):
    id: int
    user_id: int
    name: str
    description: str | None = None
    created_at: datetime
    workout_exercises: list[WorkoutExerciseRead] = []

    @classmethod
    def from_workout(cls, workout: Workout, *, by_position: bool = True) -> WorkoutRead:
        """Build the response; entries sorted by ``order`` (then id) unless ``by_position`` is False."""
        entries = workout.workout_exercises
        if by_position:
            entries = sorted(entries, key=lambda e: (e.order, e.id))
        return cls(
            id=workout.id,
            user_id=workout.user_id,
            name=workout.name,
            description=workout.description,
            created_at=workout.created_at,
            workout_exercises=[WorkoutExerciseRead.model_validate(e) for e in entries],
        )
