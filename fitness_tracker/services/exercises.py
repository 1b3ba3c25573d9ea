"""Exercise catalog CRUD. Deletion lives in ``cascade`` because it must check references."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.core.errors import ConflictError, NotFoundError, ValidationError
from fitness_tracker.db.transaction import transaction
from fitness_tracker.models.exercise import Exercise
from fitness_tracker.schemas.exercise import ExerciseCreate, ExerciseUpdate

logger = logging.getLogger(__name__)


def _name_taken() -> ConflictError:
    return ConflictError("An exercise with this name already exists", reason="exercise_exists")


def _clean_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError("Exercise name is required and must be a non-empty string")
    return name.strip()


async def _name_in_use(db: AsyncSession, name: str, exclude_id: int | None = None) -> bool:
    stmt = select(Exercise.id).where(Exercise.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Exercise.id != exclude_id)
    return (await db.scalar(stmt)) is not None


async def create_exercise(db: AsyncSession, payload: ExerciseCreate) -> Exercise:
    name = _clean_name(payload.name)
    async with transaction(db, on_integrity_error=_name_taken()):
        if await _name_in_use(db, name):
            raise _name_taken()
        exercise = Exercise(
            name=name,
            description=payload.description.strip() if payload.description is not None else None,
        )
        db.add(exercise)
    logger.info("Created exercise %s (%s)", exercise.id, exercise.name)
    return exercise


async def list_exercises(db: AsyncSession) -> list[Exercise]:
    result = await db.execute(select(Exercise).order_by(Exercise.id))
    return list(result.scalars().all())


async def get_exercise(db: AsyncSession, exercise_id: int) -> Exercise:
    exercise = await db.get(Exercise, exercise_id)
    if exercise is None:
        raise NotFoundError("Exercise")
    return exercise


async def update_exercise(db: AsyncSession, exercise_id: int, payload: ExerciseUpdate) -> Exercise:
    fields = payload.model_fields_set
    async with transaction(db, on_integrity_error=_name_taken()):
        exercise = await db.get(Exercise, exercise_id)
        if exercise is None:
            raise NotFoundError("Exercise")
        if "name" in fields:
            name = _clean_name(payload.name)
            if await _name_in_use(db, name, exclude_id=exercise_id):
                raise _name_taken()
            exercise.name = name
        if "description" in fields:
            exercise.description = payload.description.strip() if payload.description is not None else None
    return exercise
