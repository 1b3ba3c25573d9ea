"""Workout logs: performed sets recorded against a workout's entries."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.api.deps import get_current_user_id
from fitness_tracker.db.session import get_db
from fitness_tracker.schemas.log import WorkoutLogCreate, WorkoutLogRead
from fitness_tracker.services import logs as log_service

router = APIRouter()


@router.post("/{workout_id}/logs", response_model=WorkoutLogRead, status_code=201)
async def create_log(
    workout_id: int,
    payload: WorkoutLogCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Log a set for the current user."""
    return await log_service.create_log(db, user_id, workout_id, payload)


@router.get("/{workout_id}/logs", response_model=list[WorkoutLogRead], dependencies=[Depends(get_current_user_id)])
async def list_logs(
    workout_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await log_service.list_workout_logs(db, workout_id)
