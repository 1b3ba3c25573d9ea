"""Deletion of workouts, workout entries, exercises and users.

Children are always deleted explicitly before their parents (logs, then
workout entries, then workouts, then the user), inside one transaction, so the
result does not depend on the database honouring ``ON DELETE CASCADE``.
Exercises are a shared catalog: deleting one that is still referenced is
refused instead of cascaded.
"""

import logging

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.core.errors import ConflictError, NotFoundError
from fitness_tracker.db.transaction import transaction
from fitness_tracker.models.exercise import Exercise
from fitness_tracker.models.log import WorkoutLog
from fitness_tracker.models.user import User
from fitness_tracker.models.workout import Workout, WorkoutExercise

logger = logging.getLogger(__name__)

EXERCISE_IN_USE = "Cannot delete exercise used in workouts. Remove it from workouts first."

# Keep the identity map in step with bulk deletes (ids may be reused by SQLite)
_SYNC = {"synchronize_session": "fetch"}


async def purge_workout_entries(db: AsyncSession, workout_id: int) -> None:
    """Delete every entry of a workout and the logs recorded against them.

    Does not commit; callers run it inside their own transaction.
    """
    entry_ids = select(WorkoutExercise.id).where(WorkoutExercise.workout_id == workout_id)
    await db.execute(
        delete(WorkoutLog).where(WorkoutLog.workout_exercise_id.in_(entry_ids)).execution_options(**_SYNC)
    )
    await db.execute(
        delete(WorkoutExercise).where(WorkoutExercise.workout_id == workout_id).execution_options(**_SYNC)
    )


async def delete_workout(db: AsyncSession, workout_id: int) -> None:
    async with transaction(db):
        if await db.get(Workout, workout_id) is None:
            raise NotFoundError("Workout")
        await db.execute(delete(WorkoutLog).where(WorkoutLog.workout_id == workout_id).execution_options(**_SYNC))
        await purge_workout_entries(db, workout_id)
        await db.execute(delete(Workout).where(Workout.id == workout_id).execution_options(**_SYNC))
    logger.info("Deleted workout %s", workout_id)


async def delete_workout_exercise(db: AsyncSession, workout_id: int, workout_exercise_id: int) -> None:
    """Remove a single entry from a workout, with its logs."""
    async with transaction(db):
        entry = await db.scalar(
            select(WorkoutExercise).where(
                WorkoutExercise.id == workout_exercise_id,
                WorkoutExercise.workout_id == workout_id,
            )
        )
        if entry is None:
            raise NotFoundError("WorkoutExercise")
        await db.execute(
            delete(WorkoutLog)
            .where(WorkoutLog.workout_exercise_id == workout_exercise_id)
            .execution_options(**_SYNC)
        )
        await db.execute(
            delete(WorkoutExercise).where(WorkoutExercise.id == workout_exercise_id).execution_options(**_SYNC)
        )
    logger.info("Deleted workout entry %s from workout %s", workout_exercise_id, workout_id)


async def delete_exercise(db: AsyncSession, exercise_id: int) -> None:
    in_use = ConflictError(EXERCISE_IN_USE, reason="exercise_in_use")
    # A concurrent insert referencing the exercise surfaces as an FK violation
    async with transaction(db, on_integrity_error=in_use):
        if await db.get(Exercise, exercise_id) is None:
            raise NotFoundError("Exercise")
        references = await db.scalar(
            select(func.count()).select_from(WorkoutExercise).where(WorkoutExercise.exercise_id == exercise_id)
        )
        if references:
            raise in_use
        await db.execute(delete(Exercise).where(Exercise.id == exercise_id).execution_options(**_SYNC))
    logger.info("Deleted exercise %s", exercise_id)


async def delete_user(db: AsyncSession, user_id: int) -> None:
    """Delete a user with everything they own, in dependency order."""
    async with transaction(db):
        if await db.get(User, user_id) is None:
            raise NotFoundError("User")
        workout_ids = select(Workout.id).where(Workout.user_id == user_id)
        entry_ids = select(WorkoutExercise.id).where(WorkoutExercise.workout_id.in_(workout_ids))
        await db.execute(
            delete(WorkoutLog)
            .where(
                or_(
                    WorkoutLog.user_id == user_id,
                    WorkoutLog.workout_id.in_(workout_ids),
                    WorkoutLog.workout_exercise_id.in_(entry_ids),
                )
            )
            .execution_options(**_SYNC)
        )
        await db.execute(
            delete(WorkoutExercise).where(WorkoutExercise.workout_id.in_(workout_ids)).execution_options(**_SYNC)
        )
        await db.execute(delete(Workout).where(Workout.user_id == user_id).execution_options(**_SYNC))
        await db.execute(delete(User).where(User.id == user_id).execution_options(**_SYNC))
    logger.info("Deleted user %s", user_id)
