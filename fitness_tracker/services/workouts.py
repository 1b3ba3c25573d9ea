"""Workout composition: a workout and its ordered exercise entries, written as one unit.

Every check (owner, exercise references, duplicate positions) runs before the
first write, so a rejected request leaves nothing behind. Updating the
exercise list replaces it entirely; entries are never merged.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fitness_tracker.core.errors import ConflictError, FitnessTrackerError, NotFoundError, ValidationError
from fitness_tracker.db.transaction import is_foreign_key_violation, transaction
from fitness_tracker.models.user import User
from fitness_tracker.models.workout import Workout, WorkoutExercise
from fitness_tracker.schemas.workout import WorkoutCreate, WorkoutExerciseIn, WorkoutUpdate
from fitness_tracker.services.cascade import purge_workout_entries
from fitness_tracker.services.references import EXERCISES_MISSING, ensure_exercises_exist

logger = logging.getLogger(__name__)

NAME_REQUIRED = "Workout name is required and must be a non-empty string"
EXERCISES_REQUIRED = "At least one exercise is required"


def _workout_query():
    return select(Workout).options(
        selectinload(Workout.workout_exercises).selectinload(WorkoutExercise.exercise)
    )


async def _load_workout(db: AsyncSession, workout_id: int) -> Workout | None:
    # populate_existing: entries may have been replaced earlier in this session
    result = await db.execute(
        _workout_query().where(Workout.id == workout_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


def _clean_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError(NAME_REQUIRED)
    return name.strip()


def _strip(value: str | None) -> str | None:
    return value.strip() if value is not None else None


def _require_exercises(exercises: Sequence[WorkoutExerciseIn] | None) -> Sequence[WorkoutExerciseIn]:
    if not exercises:
        raise ValidationError(EXERCISES_REQUIRED)
    return exercises


def _entry_integrity_error(exc: IntegrityError) -> FitnessTrackerError:
    """Constraint violations on entry writes: an exercise removed after the check, or a repeated position."""
    if is_foreign_key_violation(exc):
        return NotFoundError("Exercise", EXERCISES_MISSING)
    return ConflictError("Exercise is listed more than once at the same order", reason="duplicate_workout_exercise")


def _build_entries(exercises: Sequence[WorkoutExerciseIn]) -> list[WorkoutExercise]:
    """Apply defaults (sets=1, order=1) and reject repeated (exercise, order) pairs.

    The same exercise may appear more than once at different positions.
    """
    seen: set[tuple[int, int]] = set()
    entries: list[WorkoutExercise] = []
    for item in exercises:
        order = item.order or 1
        key = (item.exercise_id, order)
        if key in seen:
            raise ConflictError(
                f"Exercise {item.exercise_id} is listed more than once at order {order}",
                reason="duplicate_workout_exercise",
            )
        seen.add(key)
        entries.append(
            WorkoutExercise(
                exercise_id=item.exercise_id,
                sets=item.sets or 1,
                repetitions=_strip(item.repetitions),
                weight=item.weight,
                order=order,
            )
        )
    return entries


async def create_workout(db: AsyncSession, user_id: int, payload: WorkoutCreate) -> Workout:
    """Create a workout and all of its entries, or nothing.

    Entries of the returned workout are in request order.
    """
    name = _clean_name(payload.name)
    exercises = _require_exercises(payload.exercises)

    async with transaction(db, on_integrity_error=_entry_integrity_error):
        if await db.get(User, user_id) is None:
            raise NotFoundError("User")
        await ensure_exercises_exist(db, (e.exercise_id for e in exercises))
        workout = Workout(
            user_id=user_id,
            name=name,
            description=_strip(payload.description),
            workout_exercises=_build_entries(exercises),
        )
        db.add(workout)

    logger.info("Created workout %s for user %s with %d exercises", workout.id, user_id, len(exercises))
    return await _load_workout(db, workout.id)


async def update_workout(db: AsyncSession, workout_id: int, payload: WorkoutUpdate) -> Workout:
    """Patch name/description; when ``exercises`` is given, replace the whole entry list."""
    fields = payload.model_fields_set

    async with transaction(db, on_integrity_error=_entry_integrity_error):
        result = await db.execute(select(Workout).where(Workout.id == workout_id).with_for_update())
        workout = result.scalar_one_or_none()
        if workout is None:
            raise NotFoundError("Workout")

        name = _clean_name(payload.name) if "name" in fields else None
        entries = None
        if payload.exercises is not None:
            exercises = _require_exercises(payload.exercises)
            await ensure_exercises_exist(db, (e.exercise_id for e in exercises))
            entries = _build_entries(exercises)

        if name is not None:
            workout.name = name
        if "description" in fields:
            workout.description = _strip(payload.description)
        if entries is not None:
            await purge_workout_entries(db, workout_id)
            # Drop any loaded collection so the flush does not cascade into purged rows
            db.expire(workout, ["workout_exercises"])
            for entry in entries:
                entry.workout_id = workout_id
            db.add_all(entries)

    logger.info("Updated workout %s (exercises replaced: %s)", workout_id, entries is not None)
    return await _load_workout(db, workout_id)


async def get_workout(db: AsyncSession, workout_id: int) -> Workout:
    workout = await _load_workout(db, workout_id)
    if workout is None:
        raise NotFoundError("Workout")
    return workout


async def list_user_workouts(db: AsyncSession, user_id: int) -> list[Workout]:
    if await db.get(User, user_id) is None:
        raise NotFoundError("User")
    result = await db.execute(
        _workout_query()
        .where(Workout.user_id == user_id)
        .order_by(Workout.id)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())
