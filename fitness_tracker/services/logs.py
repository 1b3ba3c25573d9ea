"""Recording performed sets against a workout entry."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.core.errors import NotFoundError
from fitness_tracker.db.transaction import transaction
from fitness_tracker.models.log import WorkoutLog
from fitness_tracker.models.workout import Workout, WorkoutExercise
from fitness_tracker.schemas.log import WorkoutLogCreate

logger = logging.getLogger(__name__)


async def create_log(db: AsyncSession, user_id: int, workout_id: int, payload: WorkoutLogCreate) -> WorkoutLog:
    """Log one set. The entry must belong to the workout."""
    async with transaction(db):
        if await db.get(Workout, workout_id) is None:
            raise NotFoundError("Workout")
        entry_id = await db.scalar(
            select(WorkoutExercise.id).where(
                WorkoutExercise.id == payload.workout_exercise_id,
                WorkoutExercise.workout_id == workout_id,
            )
        )
        if entry_id is None:
            raise NotFoundError("WorkoutExercise")
        log = WorkoutLog(user_id=user_id, workout_id=workout_id, **payload.model_dump())
        db.add(log)
    logger.info("Logged set %s for workout entry %s", payload.set_number, payload.workout_exercise_id)
    return log


async def list_workout_logs(db: AsyncSession, workout_id: int) -> list[WorkoutLog]:
    if await db.get(Workout, workout_id) is None:
        raise NotFoundError("Workout")
    result = await db.execute(
        select(WorkoutLog)
        .where(WorkoutLog.workout_id == workout_id)
        .order_by(WorkoutLog.workout_exercise_id, WorkoutLog.set_number, WorkoutLog.id)
    )
    return list(result.scalars().all())
