"""Exercise CRUD endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.api.deps import get_current_user_id
from fitness_tracker.db.session import get_db
from fitness_tracker.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate
from fitness_tracker.services import cascade
from fitness_tracker.services import exercises as exercise_service

router = APIRouter(dependencies=[Depends(get_current_user_id)])


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(db: AsyncSession = Depends(get_db)):
    return await exercise_service.list_exercises(db)


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a new exercise (name must be unique)."""
    return await exercise_service.create_exercise(db, payload)


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await exercise_service.get_exercise(db, exercise_id)


@router.put("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: int,
    payload: ExerciseUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update an exercise (partial)."""
    return await exercise_service.update_exercise(db, exercise_id, payload)


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(
    exercise_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete an exercise; refused with 409 while any workout uses it."""
    await cascade.delete_exercise(db, exercise_id)
    return None
