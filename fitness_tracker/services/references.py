"""Reference checks for exercise ids used by workout entries."""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.core.errors import NotFoundError
from fitness_tracker.models.exercise import Exercise

EXERCISES_MISSING = "One or more exercises do not exist"


async def validate_exercise_ids(db: AsyncSession, ids: Iterable[int]) -> set[int]:
    """Return the subset of ``ids`` that exist. Read-only."""
    wanted = set(ids)
    if not wanted:
        return set()
    result = await db.execute(select(Exercise.id).where(Exercise.id.in_(wanted)))
    return set(result.scalars().all())


async def ensure_exercises_exist(db: AsyncSession, ids: Iterable[int]) -> None:
    """Raise NotFound(Exercise) unless every distinct id exists."""
    wanted = set(ids)
    found = await validate_exercise_ids(db, wanted)
    if len(found) < len(wanted):
        raise NotFoundError("Exercise", EXERCISES_MISSING)
