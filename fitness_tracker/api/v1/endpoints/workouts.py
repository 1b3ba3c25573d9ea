"""Workout endpoints: user-scoped create/list plus per-workout read, update, delete."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.api.deps import get_current_user_id
from fitness_tracker.db.session import get_db
from fitness_tracker.schemas.workout import WorkoutCreate, WorkoutRead, WorkoutUpdate
from fitness_tracker.services import cascade
from fitness_tracker.services import workouts as workout_service

router = APIRouter(dependencies=[Depends(get_current_user_id)])


@router.post("/users/{user_id}/workouts", response_model=WorkoutRead, status_code=201)
async def create_workout(
    user_id: int,
    payload: WorkoutCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a workout with its exercises (entries returned in request order)."""
    workout = await workout_service.create_workout(db, user_id, payload)
    return WorkoutRead.from_workout(workout, by_position=False)


@router.get("/users/{user_id}/workouts", response_model=list[WorkoutRead])
async def list_user_workouts(
    user_id: int,
    db: AsyncSession = Depends(get_db),
):
    workouts = await workout_service.list_user_workouts(db, user_id)
    return [WorkoutRead.from_workout(w) for w in workouts]


@router.get("/workouts/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a workout with its exercises ordered by position."""
    workout = await workout_service.get_workout(db, workout_id)
    return WorkoutRead.from_workout(workout)


@router.put("/workouts/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: int,
    payload: WorkoutUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update name/description; a supplied ``exercises`` list replaces the current one."""
    workout = await workout_service.update_workout(db, workout_id, payload)
    return WorkoutRead.from_workout(workout)


@router.delete("/workouts/{workout_id}", status_code=204)
async def delete_workout(
    workout_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a workout, its exercises and its logs."""
    await cascade.delete_workout(db, workout_id)
    return None


@router.delete("/workouts/{workout_id}/exercises/{workout_exercise_id}", status_code=204)
async def delete_workout_exercise(
    workout_id: int,
    workout_exercise_id: int,
    db: AsyncSession = Depends(get_db),
):
    await cascade.delete_workout_exercise(db, workout_id, workout_exercise_id)
    return None
