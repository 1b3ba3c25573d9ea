"""ORM models - import all so Base.metadata is complete for migrations."""

from fitness_tracker.models.exercise import Exercise
from fitness_tracker.models.log import WorkoutLog
from fitness_tracker.models.user import User
from fitness_tracker.models.workout import Workout, WorkoutExercise

__all__ = [
    "Exercise",
    "User",
    "Workout",
    "WorkoutExercise",
    "WorkoutLog",
]
